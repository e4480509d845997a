"""
Contracts Module

Explicit data types shared between layers. All inter-layer
communication uses these contracts.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Node ids never carry the transport prefix
3. Unusable records are represented by absence, never by exceptions
"""

from .base import (
    NODE_ID_PREFIX, SYNTHETIC_EDGE_PREFIX, EDGE_ELEMENT_PREFIX,
    DEFAULT_RELATIONSHIP_TYPE, MENTIONS_RELATIONSHIP, MENTIONS_LABEL,
    NodeKind, strip_node_prefix, with_node_prefix,
)
from .graph import (
    CanonicalNode, CanonicalEdge, SyntheticEdge, GraphElement, CanonicalGraph,
)
from .stats import (
    EntityHub, TypeDistribution, RelationshipBreakdown,
    EpisodeActivityBucket, GraphStatistics,
)

__all__ = [
    'NODE_ID_PREFIX', 'SYNTHETIC_EDGE_PREFIX', 'EDGE_ELEMENT_PREFIX',
    'DEFAULT_RELATIONSHIP_TYPE', 'MENTIONS_RELATIONSHIP', 'MENTIONS_LABEL',
    'NodeKind', 'strip_node_prefix', 'with_node_prefix',
    'CanonicalNode', 'CanonicalEdge', 'SyntheticEdge', 'GraphElement',
    'CanonicalGraph',
    'EntityHub', 'TypeDistribution', 'RelationshipBreakdown',
    'EpisodeActivityBucket', 'GraphStatistics',
]
