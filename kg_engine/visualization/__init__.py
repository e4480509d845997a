"""
Visualization Layer

Responsibility:
Transformation of graph elements into renderable multigraphs.

PRINCIPLES:
1. Fresh graph per call, never mutated incrementally afterwards
2. No layout computation (placeholder positions only)
3. Unknown endpoints are dropped, never invented
"""

from .theme import (
    EPISODE_COLOR, ENTITY_COLOR, USER_COLOR, UNKNOWN_COLOR, EDGE_COLOR,
    NodeColorConfig, ResolvedNodeColors,
    has_user_label, resolve_node_color, edge_display_label,
)
from .graph import (
    VisualizationConfig, truncate_label, apply_degree_sizing,
    build_visualization_graph,
    GraphNodeView, GraphEdgeView, NetworkGraphView, to_graph_view,
)

__all__ = [
    'EPISODE_COLOR', 'ENTITY_COLOR', 'USER_COLOR', 'UNKNOWN_COLOR', 'EDGE_COLOR',
    'NodeColorConfig', 'ResolvedNodeColors',
    'has_user_label', 'resolve_node_color', 'edge_display_label',
    'VisualizationConfig', 'truncate_label', 'apply_degree_sizing',
    'build_visualization_graph',
    'GraphNodeView', 'GraphEdgeView', 'NetworkGraphView', 'to_graph_view',
]
