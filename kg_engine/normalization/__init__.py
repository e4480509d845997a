"""
Normalization Layer

RESPONSIBILITY: Alias resolution and canonicalization of raw records
ALLOWED INPUTS: Arbitrary string-keyed record bags
OUTPUTS: CanonicalNode, CanonicalEdge, CanonicalGraph

WHAT THIS LAYER MUST NOT DO:
============================
- Raise on unusable records (return None instead)
- Filter edges against a node set (downstream responsibility)
- Synthesize edges
"""

from .records import (
    NormalizationConfig,
    NODE_ID_KEYS, NODE_NAME_KEYS, NODE_KIND_KEYS,
    EDGE_SOURCE_KEYS, EDGE_TARGET_KEYS, EDGE_TYPE_KEYS,
    normalize_node, normalize_edge, normalize_node_id,
    resolve_node_kind, build_properties, resolve_episode_refs,
    is_edge_record,
)
from .index import (
    NormalizationReport, build_canonical_graph, merge_canonical_graphs,
)

__all__ = [
    'NormalizationConfig',
    'NODE_ID_KEYS', 'NODE_NAME_KEYS', 'NODE_KIND_KEYS',
    'EDGE_SOURCE_KEYS', 'EDGE_TARGET_KEYS', 'EDGE_TYPE_KEYS',
    'normalize_node', 'normalize_edge', 'normalize_node_id',
    'resolve_node_kind', 'build_properties', 'resolve_episode_refs',
    'is_edge_record',
    'NormalizationReport', 'build_canonical_graph', 'merge_canonical_graphs',
]
