"""
Canonical Graph Contracts

Immutable node/edge representations shared by every downstream layer.

MAPPING BOUNDARY:
=================
Raw upstream records never travel past the normalization layer.
Everything after it consumes these types only.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from .base import (
    NodeKind, MENTIONS_RELATIONSHIP, MENTIONS_LABEL, with_node_prefix,
)


# =============================================================================
# CANONICAL NODE / EDGE
# =============================================================================

@dataclass(frozen=True)
class CanonicalNode:
    """
    Alias-resolved node.

    node_id is non-empty and never carries the transport prefix.
    properties is the flattened record; treat it as read-only.
    """
    node_id: str
    name: str
    kind: NodeKind
    labels: Tuple[str, ...] = ()
    properties: Dict[str, Any] = field(default_factory=dict)
    summary: Optional[str] = None
    content: Optional[str] = None
    valid_at: Optional[Any] = None

    @property
    def label_set(self) -> FrozenSet[str]:
        """Lower-cased labels for membership checks."""
        return frozenset(label.lower() for label in self.labels)

    @property
    def is_episode(self) -> bool:
        return self.kind is NodeKind.EPISODE


@dataclass(frozen=True)
class CanonicalEdge:
    """
    Alias-resolved relationship between two node ids.

    Endpoints are prefix-stripped but are NOT guaranteed to reference
    known nodes; consumers filter against their own id set.
    """
    source_id: str
    target_id: str
    relationship_type: str
    fact: Optional[str] = None
    name: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    episode_refs: Optional[Tuple[str, ...]] = None

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.source_id, self.target_id, self.relationship_type)


# =============================================================================
# SYNTHETIC EDGES (generated, never persisted)
# =============================================================================

@dataclass(frozen=True)
class SyntheticEdge:
    """Episode -> entity MENTIONS edge derived from episode references."""
    edge_id: str
    source_id: str
    target_id: str
    relationship_type: str = MENTIONS_RELATIONSHIP
    label: str = MENTIONS_LABEL

    def to_element(self) -> GraphElement:
        return GraphElement(data={
            "id": self.edge_id,
            "source": with_node_prefix(self.source_id),
            "target": with_node_prefix(self.target_id),
            "label": self.label,
            "relationship": self.relationship_type,
        })


# =============================================================================
# RENDERABLE ELEMENTS
# =============================================================================

@dataclass(frozen=True)
class GraphElement:
    """
    Loosely-typed element consumed by the visualization builder.

    An element is an edge iff data holds non-null `source` and `target`.
    """
    data: Mapping[str, Any]
    classes: Optional[str] = None

    @property
    def is_edge(self) -> bool:
        return (
            self.data.get("source") is not None
            and self.data.get("target") is not None
        )


# =============================================================================
# CANONICAL GRAPH INDEX
# =============================================================================

@dataclass(frozen=True)
class CanonicalGraph:
    """
    Ordered canonical node/edge collections with id lookup.

    Node ids are unique; edges are kept in input order.
    """
    nodes: Tuple[CanonicalNode, ...] = ()
    edges: Tuple[CanonicalEdge, ...] = ()

    @property
    def node_ids(self) -> FrozenSet[str]:
        return frozenset(node.node_id for node in self.nodes)

    def get_node(self, node_id: str) -> Optional[CanonicalNode]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return node_id in self.node_ids

    @property
    def entities(self) -> Tuple[CanonicalNode, ...]:
        return tuple(n for n in self.nodes if n.kind is NodeKind.ENTITY)

    @property
    def episodes(self) -> Tuple[CanonicalNode, ...]:
        return tuple(n for n in self.nodes if n.kind is NodeKind.EPISODE)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[CanonicalNode]:
        return iter(self.nodes)
