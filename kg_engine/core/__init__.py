"""
Core Graph Layer

RESPONSIBILITY: Edge synthesis and element construction
ALLOWED INPUTS: CanonicalGraph, CanonicalEdge, known node id sets
OUTPUTS: SyntheticEdge, GraphElement

WHAT THIS LAYER MUST NOT DO:
============================
- Reference nodes outside the caller-supplied id set
- Keep state between calls
- Compute layout or display attributes
"""

from .episodic import synthesize_episodic_edges
from .elements import (
    ElementCounts, element_data, is_edge_data, count_elements,
    build_graph_elements,
)

__all__ = [
    'synthesize_episodic_edges',
    'ElementCounts', 'element_data', 'is_edge_data', 'count_elements',
    'build_graph_elements',
]
