"""
Knowledge Graph Canonicalization & Visualization Engine

Turns heterogeneous, loosely-typed records from a search/episode API
into a canonical, renderable, analyzable graph.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable canonical node/edge/statistics types and id helpers

2. NORMALIZATION (normalization/)
   - Alias resolution, kind inference, property flattening
   - Unusable records yield None, never exceptions

3. CORE (core/)
   - Episodic MENTIONS edge synthesis, element construction

4. VISUALIZATION (visualization/)
   - Renderable multigraph with colors and degree-scaled sizes

5. ANALYTICS (analytics/)
   - Hub ranking, type/relationship distributions, episode activity

6. OBSERVABILITY (observability/)
   - Logging only; never alters results

CONSTRAINTS ENFORCED:
=====================
- Pure functions over caller-owned inputs, no global state
- Partial, best-effort graphs instead of all-or-nothing failures
- No layout computation, no fetching, no access control
"""

from .contracts import (
    NodeKind, CanonicalNode, CanonicalEdge, SyntheticEdge, GraphElement,
    CanonicalGraph, GraphStatistics, strip_node_prefix,
)
from .normalization import (
    normalize_node, normalize_edge, resolve_node_kind, build_properties,
    build_canonical_graph, merge_canonical_graphs,
)
from .core import synthesize_episodic_edges, build_graph_elements, count_elements
from .visualization import (
    NodeColorConfig, VisualizationConfig, build_visualization_graph, to_graph_view,
)
from .analytics import (
    compute_top_hubs, compute_type_distribution, compute_relationship_breakdown,
    compute_episode_activity, compute_graph_statistics,
)
from .config import EngineConfig
from .engine import KnowledgeGraphEngine, EngineResult

__version__ = "0.1.0"

__all__ = [
    'NodeKind', 'CanonicalNode', 'CanonicalEdge', 'SyntheticEdge', 'GraphElement',
    'CanonicalGraph', 'GraphStatistics', 'strip_node_prefix',
    'normalize_node', 'normalize_edge', 'resolve_node_kind', 'build_properties',
    'build_canonical_graph', 'merge_canonical_graphs',
    'synthesize_episodic_edges', 'build_graph_elements', 'count_elements',
    'NodeColorConfig', 'VisualizationConfig', 'build_visualization_graph',
    'to_graph_view',
    'compute_top_hubs', 'compute_type_distribution', 'compute_relationship_breakdown',
    'compute_episode_activity', 'compute_graph_statistics',
    'EngineConfig', 'KnowledgeGraphEngine', 'EngineResult',
]
