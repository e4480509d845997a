"""
Analytics Aggregator
====================

Four independent pure functions over canonical nodes/edges.

GUARANTEES:
- Inputs are treated as read-only views
- Empty input yields empty output
- Percentage denominators never reach zero
- Nothing here raises on malformed temporal values
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence
import re

from ..contracts.graph import CanonicalNode, CanonicalEdge, CanonicalGraph
from ..contracts.stats import (
    EntityHub, TypeDistribution, RelationshipBreakdown,
    EpisodeActivityBucket, GraphStatistics,
)


UNCATEGORIZED_LABEL = "uncategorized"
UNKNOWN_RELATIONSHIP = "unknown"
EXCLUDED_TYPE_LABEL = "entity"

_DAY_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class AnalyticsConfig:
    """Configuration for aggregate statistics."""
    hub_limit: int = 10

    def __post_init__(self):
        if self.hub_limit < 0:
            raise ValueError("hub_limit must be non-negative")


def _percentage(count: int, total: int) -> int:
    """Round count/total*100 half-up to an integer (total 0 treated as 1)."""
    total = total or 1
    return (200 * count + total) // (2 * total)


# =============================================================================
# HUBS
# =============================================================================

def compute_top_hubs(
    nodes: Sequence[CanonicalNode],
    edges: Iterable[CanonicalEdge],
    limit: int = 10
) -> List[EntityHub]:
    """
    Rank nodes by incident edge count, highest first.

    Both endpoints count. Ties keep input order; unconnected nodes
    rank last with a count of 0.
    """
    counts: Counter = Counter()
    for edge in edges:
        if edge.source_id:
            counts[edge.source_id] += 1
        if edge.target_id:
            counts[edge.target_id] += 1

    hubs = [
        EntityHub(node=node, connection_count=counts.get(node.node_id, 0))
        for node in nodes
    ]
    hubs.sort(key=lambda hub: hub.connection_count, reverse=True)
    return hubs[:max(limit, 0)]


# =============================================================================
# DISTRIBUTIONS
# =============================================================================

def _type_label(node: CanonicalNode) -> str:
    for label in node.labels:
        if label != EXCLUDED_TYPE_LABEL:
            return label
    return UNCATEGORIZED_LABEL


def compute_type_distribution(
    nodes: Sequence[CanonicalNode]
) -> List[TypeDistribution]:
    """
    Count nodes by their first label other than the literal "entity".

    Grouping is case-insensitive; nodes with no other label are
    "uncategorized".
    """
    counts: Counter = Counter(_type_label(node).lower() for node in nodes)
    total = len(nodes)
    distribution = [
        TypeDistribution(label=label, count=count, percentage=_percentage(count, total))
        for label, count in counts.items()
    ]
    distribution.sort(key=lambda item: item.count, reverse=True)
    return distribution


def compute_relationship_breakdown(
    edges: Sequence[CanonicalEdge]
) -> List[RelationshipBreakdown]:
    """Count edges by relationship type; empty types become "unknown"."""
    counts: Counter = Counter(
        edge.relationship_type or UNKNOWN_RELATIONSHIP for edge in edges
    )
    total = len(edges)
    breakdown = [
        RelationshipBreakdown(
            relationship_type=relationship_type,
            count=count,
            percentage=_percentage(count, total),
        )
        for relationship_type, count in counts.items()
    ]
    breakdown.sort(key=lambda item: item.count, reverse=True)
    return breakdown


# =============================================================================
# ACTIVITY
# =============================================================================

def day_key(value: Any) -> Optional[str]:
    """
    Calendar-day key (YYYY-MM-DD, UTC) for a temporal value.

    Aware datetimes are converted to UTC, naive ones are taken as UTC.
    Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, str):
        text = value.strip()
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            match = _DAY_PREFIX.match(text)
            if match is None:
                return None
            try:
                return date.fromisoformat(match.group(0)).isoformat()
            except ValueError:
                return None
    else:
        return None

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date().isoformat()


def compute_episode_activity(
    nodes: Iterable[CanonicalNode]
) -> List[EpisodeActivityBucket]:
    """
    Count episodes per calendar day, oldest day first.

    Non-episode nodes and episodes without a usable valid_at are excluded.
    """
    buckets: Counter = Counter()
    for node in nodes:
        if not node.is_episode:
            continue
        key = day_key(node.valid_at)
        if key is not None:
            buckets[key] += 1

    return [
        EpisodeActivityBucket(date=key, count=count)
        for key, count in sorted(buckets.items())
    ]


# =============================================================================
# BUNDLE
# =============================================================================

def compute_graph_statistics(
    graph: CanonicalGraph,
    hub_limit: Optional[int] = None,
    config: Optional[AnalyticsConfig] = None
) -> GraphStatistics:
    """Run all four aggregators over one canonical graph."""
    config = config or AnalyticsConfig()
    limit = config.hub_limit if hub_limit is None else hub_limit
    entities = graph.entities

    return GraphStatistics(
        top_hubs=tuple(compute_top_hubs(entities, graph.edges, limit)),
        type_distribution=tuple(compute_type_distribution(entities)),
        relationship_breakdown=tuple(compute_relationship_breakdown(graph.edges)),
        episode_activity=tuple(compute_episode_activity(graph.episodes)),
    )
