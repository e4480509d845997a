"""
Visualization Graph Builder
===========================

Deterministic transformation of graph elements into a renderable
multigraph (parallel edges and self-loops permitted).

RENDER CONTRACT:
================
- Nodes: label (length-capped), placeholder x/y, size, color, node_type
- Edges: label, size (weight), color
- An edge is only added when both endpoints were inserted as nodes
- Duplicate node/edge ids are disambiguated, never overwritten
- Placeholder positions are random unless a seed is configured;
  layout is a downstream concern
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import math

import networkx as nx
import numpy as np

from ..contracts.base import strip_node_prefix
from ..core.elements import ElementLike, element_data, is_edge_data
from ..observability import get_logger
from .theme import EDGE_COLOR, NodeColorConfig, edge_display_label, resolve_node_color


logger = get_logger(__name__)

ELLIPSIS = "…"
DUPLICATE_SUFFIX = "__dup_"
NODE_LABEL_KEYS: Tuple[str, ...] = ("labelFull", "label", "labelShort")


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class VisualizationConfig:
    """Configuration for visualization graph construction."""
    min_node_size: float = 6.0
    max_node_size: float = 24.0
    label_max_length: int = 30
    position_extent: float = 100.0
    edge_color: str = EDGE_COLOR
    edge_size: float = 1.0
    position_seed: Optional[int] = None

    def __post_init__(self):
        if self.min_node_size <= 0:
            raise ValueError("min_node_size must be positive")
        if self.max_node_size < self.min_node_size:
            raise ValueError("max_node_size must be >= min_node_size")
        if self.label_max_length < 1:
            raise ValueError("label_max_length must be at least 1")
        if self.position_extent <= 0:
            raise ValueError("position_extent must be positive")


# =============================================================================
# HELPERS
# =============================================================================

def truncate_label(text: Optional[str], max_length: int = 30) -> str:
    """Cap a label at max_length characters, ellipsis included."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return f"{text[:max_length - 1]}{ELLIPSIS}"


def _display_label(data: Mapping[str, Any]) -> str:
    for key in NODE_LABEL_KEYS:
        value = data.get(key)
        if value is not None and value != "":
            return str(value)
    return ""


def _disambiguate(
    base_id: str,
    used: Dict[str, int],
    is_taken: Callable[[str], bool]
) -> str:
    """
    First free id for base_id: the base itself, then base__dup_2, base__dup_3...

    Candidates already present in the graph are skipped.
    """
    count = used.get(base_id, 0)
    candidate = base_id if count == 0 else f"{base_id}{DUPLICATE_SUFFIX}{count + 1}"
    while is_taken(candidate):
        count += 1
        candidate = f"{base_id}{DUPLICATE_SUFFIX}{count + 1}"
    used[base_id] = count + 1
    return candidate


def _partition(
    elements: Iterable[ElementLike]
) -> Tuple[List[Mapping[str, Any]], List[Mapping[str, Any]]]:
    nodes: List[Mapping[str, Any]] = []
    edges: List[Mapping[str, Any]] = []
    for element in elements:
        data = element_data(element)
        if data is None:
            continue
        (edges if is_edge_data(data) else nodes).append(data)
    return nodes, edges


def apply_degree_sizing(
    graph: nx.MultiDiGraph,
    min_size: float = 6.0,
    max_size: float = 24.0
) -> None:
    """
    Scale every node's size by log degree relative to the max degree.

    size = min + ln(d + 1) / ln(max_d + 1) * (max - min), with max_d >= 1.
    """
    if graph.number_of_nodes() == 0:
        return

    degrees = dict(graph.degree())
    max_degree = max(1, max(degrees.values()))
    denominator = math.log(max_degree + 1)

    for node_id, degree in degrees.items():
        normalized = math.log(degree + 1) / denominator
        graph.nodes[node_id]["size"] = min_size + normalized * (max_size - min_size)


# =============================================================================
# BUILDER
# =============================================================================

def build_visualization_graph(
    elements: Optional[Iterable[ElementLike]],
    node_colors: Union[NodeColorConfig, Mapping[str, Any], None] = None,
    config: Optional[VisualizationConfig] = None
) -> nx.MultiDiGraph:
    """
    Build a fresh renderable multigraph from graph elements.

    Malformed elements and edges with unknown endpoints are skipped.
    Always returns a graph, possibly empty.
    """
    config = config or VisualizationConfig()
    if not isinstance(node_colors, NodeColorConfig):
        node_colors = NodeColorConfig.from_mapping(node_colors)
    colors = node_colors.resolved()

    graph = nx.MultiDiGraph()
    graph.graph["dropped_edge_count"] = 0
    if not elements:
        return graph

    node_items, edge_items = _partition(elements)
    rng = np.random.default_rng(config.position_seed)
    extent = config.position_extent

    used_node_ids: Dict[str, int] = {}
    for data in node_items:
        base_id = strip_node_prefix(data.get("id"))
        if not base_id:
            continue
        node_id = _disambiguate(base_id, used_node_ids, graph.has_node)

        node_type = data.get("node_type")
        x, y = rng.uniform(-extent, extent, size=2)
        graph.add_node(
            node_id,
            label=truncate_label(_display_label(data), config.label_max_length),
            x=float(x),
            y=float(y),
            size=config.min_node_size,
            color=resolve_node_color(node_type, data.get("labels"), colors),
            node_type=str(node_type) if node_type else "unknown",
            base_id=base_id,
        )

    used_edge_ids: Dict[str, int] = {}
    dropped = 0
    for data in edge_items:
        source_id = strip_node_prefix(data.get("source"))
        target_id = strip_node_prefix(data.get("target"))
        if not graph.has_node(source_id) or not graph.has_node(target_id):
            dropped += 1
            continue

        raw_id = data.get("id")
        base_id = str(raw_id) if raw_id else f"{data.get('source')}->{data.get('target')}"
        edge_id = _disambiguate(
            base_id,
            used_edge_ids,
            lambda key: graph.has_edge(source_id, target_id, key),
        )

        label = data.get("label") or data.get("relationship")
        relationship = data.get("relationship")
        graph.add_edge(
            source_id,
            target_id,
            key=edge_id,
            label=edge_display_label(str(label)) if label else None,
            relationship=str(relationship) if relationship else None,
            size=config.edge_size,
            color=config.edge_color,
        )

    graph.graph["dropped_edge_count"] = dropped
    if dropped:
        logger.debug("Dropped %d edge(s) with unknown endpoints", dropped)

    apply_degree_sizing(graph, config.min_node_size, config.max_node_size)
    return graph


# =============================================================================
# RENDER VIEW (frozen snapshot)
# =============================================================================

@dataclass(frozen=True)
class GraphNodeView:
    """Renderable graph node."""
    node_id: str
    x: float
    y: float
    size: float
    color: str
    label: str
    node_type: str


@dataclass(frozen=True)
class GraphEdgeView:
    """Renderable graph edge."""
    edge_id: str
    source_id: str
    target_id: str
    size: float
    color: str
    label: Optional[str]


@dataclass(frozen=True)
class NetworkGraphView:
    """Immutable snapshot of a visualization graph."""
    nodes: Tuple[GraphNodeView, ...]
    edges: Tuple[GraphEdgeView, ...]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


def to_graph_view(graph: nx.MultiDiGraph) -> NetworkGraphView:
    nodes = tuple(
        GraphNodeView(
            node_id=node_id,
            x=attrs["x"],
            y=attrs["y"],
            size=attrs["size"],
            color=attrs["color"],
            label=attrs["label"],
            node_type=attrs["node_type"],
        )
        for node_id, attrs in graph.nodes(data=True)
    )
    edges = tuple(
        GraphEdgeView(
            edge_id=key,
            source_id=source,
            target_id=target,
            size=attrs["size"],
            color=attrs["color"],
            label=attrs.get("label"),
        )
        for source, target, key, attrs in graph.edges(keys=True, data=True)
    )
    return NetworkGraphView(nodes=nodes, edges=edges)
