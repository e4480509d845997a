"""
Analytics Layer

RESPONSIBILITY: Hub rankings, distributions and activity series
ALLOWED INPUTS: Canonical nodes/edges (read-only)
OUTPUTS: Plain ordered statistics records
"""

from .aggregates import (
    AnalyticsConfig,
    UNCATEGORIZED_LABEL, UNKNOWN_RELATIONSHIP,
    compute_top_hubs, compute_type_distribution,
    compute_relationship_breakdown, compute_episode_activity,
    compute_graph_statistics, day_key,
)

__all__ = [
    'AnalyticsConfig',
    'UNCATEGORIZED_LABEL', 'UNKNOWN_RELATIONSHIP',
    'compute_top_hubs', 'compute_type_distribution',
    'compute_relationship_breakdown', 'compute_episode_activity',
    'compute_graph_statistics', 'day_key',
]
