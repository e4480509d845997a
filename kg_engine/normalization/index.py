"""
Canonical Graph Index
=====================

Builds the canonical node/edge index from an ordered record sequence
and merges indexes from separate fetches.

TRACEABLE:
Every input record results in exactly one of:
- A node in the index
- An edge in the index
- A skip (unusable record)
- A duplicate (node id already indexed; first seen wins)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from ..contracts.graph import CanonicalNode, CanonicalEdge, CanonicalGraph
from .records import (
    NormalizationConfig, normalize_node, normalize_edge, is_edge_record,
)


@dataclass(frozen=True)
class NormalizationReport:
    """
    Counts for one normalization pass.

    Reasons for individual drops are deliberately not recorded.
    """
    processed_count: int = 0
    node_count: int = 0
    edge_count: int = 0
    skipped_count: int = 0
    duplicate_node_count: int = 0

    def to_dict(self) -> dict:
        return {
            'processed_count': self.processed_count,
            'node_count': self.node_count,
            'edge_count': self.edge_count,
            'skipped_count': self.skipped_count,
            'duplicate_node_count': self.duplicate_node_count,
        }


def build_canonical_graph(
    records: Iterable[Any],
    config: Optional[NormalizationConfig] = None
) -> Tuple[CanonicalGraph, NormalizationReport]:
    """
    Normalize raw records into a CanonicalGraph.

    Edge-shaped records become edges, everything else is tried as a node.
    Edges are not filtered against the node set here.
    """
    nodes: Dict[str, CanonicalNode] = {}
    edges: List[CanonicalEdge] = []
    processed = skipped = duplicates = 0

    for raw in records or ():
        processed += 1

        if is_edge_record(raw):
            edge = normalize_edge(raw, config)
            if edge is None:
                skipped += 1
            else:
                edges.append(edge)
            continue

        node = normalize_node(raw, config)
        if node is None:
            skipped += 1
        elif node.node_id in nodes:
            duplicates += 1
        else:
            nodes[node.node_id] = node

    report = NormalizationReport(
        processed_count=processed,
        node_count=len(nodes),
        edge_count=len(edges),
        skipped_count=skipped,
        duplicate_node_count=duplicates,
    )
    return CanonicalGraph(nodes=tuple(nodes.values()), edges=tuple(edges)), report


def merge_canonical_graphs(
    base: Optional[CanonicalGraph],
    incoming: Optional[CanonicalGraph]
) -> CanonicalGraph:
    """
    Merge two canonical graphs, e.g. a search result and an expansion.

    Nodes dedup by id, edges by (source, target, relationship type);
    base entries win.
    """
    if base is None:
        return incoming or CanonicalGraph()
    if incoming is None:
        return base

    node_ids: Set[str] = set()
    merged_nodes: List[CanonicalNode] = []
    for node in base.nodes + incoming.nodes:
        if node.node_id in node_ids:
            continue
        node_ids.add(node.node_id)
        merged_nodes.append(node)

    edge_keys: Set[Tuple[str, str, str]] = set()
    merged_edges: List[CanonicalEdge] = []
    for edge in base.edges + incoming.edges:
        if edge.key in edge_keys:
            continue
        edge_keys.add(edge.key)
        merged_edges.append(edge)

    return CanonicalGraph(nodes=tuple(merged_nodes), edges=tuple(merged_edges))
