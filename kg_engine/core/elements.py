"""
Graph Element Construction
==========================

Converts a canonical graph into the loosely-typed element list the
visualization builder consumes.

MAPPING RULES:
==============
1. One node element per canonical node, id carries the transport prefix
2. Edge elements only when both endpoints are known nodes
3. Synthetic MENTIONS elements are appended after the source edges
4. Canonical fields override flattened properties of the same name
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..contracts.base import EDGE_ELEMENT_PREFIX, with_node_prefix
from ..contracts.graph import CanonicalGraph, GraphElement
from .episodic import synthesize_episodic_edges


ElementLike = Union[GraphElement, Mapping[str, Any]]


@dataclass(frozen=True)
class ElementCounts:
    node_count: int
    edge_count: int


def element_data(element: Any) -> Optional[Mapping[str, Any]]:
    """
    Data mapping of an element, or None for malformed input.

    Accepts GraphElement instances and plain {"data": {...}} mappings.
    """
    if isinstance(element, GraphElement):
        data = element.data
    elif isinstance(element, Mapping):
        data = element.get("data")
    else:
        return None
    return data if isinstance(data, Mapping) else None


def is_edge_data(data: Mapping[str, Any]) -> bool:
    return data.get("source") is not None and data.get("target") is not None


def count_elements(elements: Iterable[ElementLike]) -> ElementCounts:
    """Count node and edge elements; malformed elements count as neither."""
    nodes = edges = 0
    for element in elements or ():
        data = element_data(element)
        if data is None:
            continue
        if is_edge_data(data):
            edges += 1
        else:
            nodes += 1
    return ElementCounts(node_count=nodes, edge_count=edges)


def build_graph_elements(
    graph: CanonicalGraph,
    include_episodic: bool = True
) -> List[GraphElement]:
    """Build renderable elements from a canonical graph."""
    result: List[GraphElement] = []
    node_ids = graph.node_ids

    for node in graph.nodes:
        data = dict(node.properties)
        # a node element must never look like an edge
        data.pop("source", None)
        data.pop("target", None)
        data.update({
            "id": with_node_prefix(node.node_id),
            "label": node.name,
            "node_type": node.kind.value,
            "labels": list(node.labels),
        })
        for key, value in (
            ("summary", node.summary),
            ("content", node.content),
            ("valid_at", node.valid_at),
        ):
            if value is not None:
                data[key] = value
        result.append(GraphElement(data=data))

    edge_index = 0
    for edge in graph.edges:
        if edge.source_id not in node_ids or edge.target_id not in node_ids:
            continue
        data = dict(edge.properties)
        data.update({
            "id": f"{EDGE_ELEMENT_PREFIX}{edge.source_id}-{edge.target_id}-{edge_index}",
            "source": with_node_prefix(edge.source_id),
            "target": with_node_prefix(edge.target_id),
            "label": edge.name or edge.relationship_type or edge.fact,
            "name": edge.name,
            "fact": edge.fact,
            "relationship": edge.relationship_type,
            "attributes": dict(edge.properties),
        })
        edge_index += 1
        result.append(GraphElement(data=data))

    if include_episodic:
        result.extend(
            synthetic.to_element()
            for synthetic in synthesize_episodic_edges(graph.edges, node_ids)
        )

    return result
