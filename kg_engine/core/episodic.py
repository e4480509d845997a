"""
Episodic Edge Synthesizer
=========================

Derives implicit episode -> entity MENTIONS edges from the episode
references carried on relationship edges.

GUARANTEES:
- Never references a node outside the caller's known id set
- Each (episode, endpoint) pair is emitted at most once per call
- Synthetic edge ids carry the `ep:` marker and are unique per call
- Ids are NOT stable across calls; do not compare them for equality
"""

from __future__ import annotations
from typing import AbstractSet, Any, Iterable, List, Mapping, Set, Tuple, Union

from ..contracts.base import SYNTHETIC_EDGE_PREFIX, strip_node_prefix
from ..contracts.graph import CanonicalEdge, SyntheticEdge
from ..normalization.records import normalize_edge


EdgeLike = Union[CanonicalEdge, Mapping[str, Any]]


def synthesize_episodic_edges(
    edges: Iterable[EdgeLike],
    known_node_ids: AbstractSet[str]
) -> List[SyntheticEdge]:
    """
    Emit one MENTIONS edge per (episode, endpoint) pair.

    An edge without an episode reference list (absent, empty or not a
    list) contributes nothing. Raw mappings are normalized first.
    """
    seen: Set[Tuple[str, str]] = set()
    result: List[SyntheticEdge] = []

    def add_synthetic_edge(episode_id: str, entity_id: str) -> None:
        pair = (episode_id, entity_id)
        if pair in seen:
            return
        seen.add(pair)
        result.append(SyntheticEdge(
            edge_id=f"{SYNTHETIC_EDGE_PREFIX}{episode_id}-{entity_id}-{len(result)}",
            source_id=episode_id,
            target_id=entity_id,
        ))

    for edge in edges or ():
        if not isinstance(edge, CanonicalEdge):
            edge = normalize_edge(edge)
            if edge is None:
                continue

        # refs were resolved from the raw record; merged properties are not re-read
        refs = edge.episode_refs
        if not refs:
            continue

        for ref in refs:
            episode_id = strip_node_prefix(ref)
            if not episode_id or episode_id not in known_node_ids:
                continue
            for endpoint in (edge.source_id, edge.target_id):
                if endpoint and endpoint in known_node_ids:
                    add_synthetic_edge(episode_id, endpoint)

    return result
