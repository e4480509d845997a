"""
Aggregate Statistics Contracts

Derived, read-only summaries of a canonical graph.
Recomputed on demand; no persisted identity.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .graph import CanonicalNode


@dataclass(frozen=True)
class EntityHub:
    """A node paired with its incident edge count."""
    node: CanonicalNode
    connection_count: int


@dataclass(frozen=True)
class TypeDistribution:
    label: str
    count: int
    percentage: int


@dataclass(frozen=True)
class RelationshipBreakdown:
    relationship_type: str
    count: int
    percentage: int


@dataclass(frozen=True)
class EpisodeActivityBucket:
    """Episode count for one calendar day (YYYY-MM-DD)."""
    date: str
    count: int


@dataclass(frozen=True)
class GraphStatistics:
    """The four independent aggregates for one canonical graph."""
    top_hubs: Tuple[EntityHub, ...]
    type_distribution: Tuple[TypeDistribution, ...]
    relationship_breakdown: Tuple[RelationshipBreakdown, ...]
    episode_activity: Tuple[EpisodeActivityBucket, ...]

    def to_dict(self) -> dict:
        return {
            'top_hubs': [
                {'node_id': h.node.node_id, 'name': h.node.name,
                 'connection_count': h.connection_count}
                for h in self.top_hubs
            ],
            'type_distribution': [
                {'label': t.label, 'count': t.count, 'percentage': t.percentage}
                for t in self.type_distribution
            ],
            'relationship_breakdown': [
                {'type': r.relationship_type, 'count': r.count,
                 'percentage': r.percentage}
                for r in self.relationship_breakdown
            ],
            'episode_activity': [
                {'date': b.date, 'count': b.count}
                for b in self.episode_activity
            ],
        }
