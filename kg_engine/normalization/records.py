"""
Record Normalizer
=================

Maps arbitrary raw upstream records (string-keyed bags) to canonical
nodes and edges.

GUARANTEES:
- Every record either normalizes or yields None ("unusable record")
- Nothing here raises on malformed input
- Returned ids never carry the transport prefix
- Pure functions: no I/O, no shared state
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..contracts.base import (
    NodeKind, NODE_ID_PREFIX, DEFAULT_RELATIONSHIP_TYPE, strip_node_prefix,
)
from ..contracts.graph import CanonicalNode, CanonicalEdge


# =============================================================================
# ALIAS CHAINS
# =============================================================================

NODE_ID_KEYS: Tuple[str, ...] = ("uuid", "id", "node_uuid", "nodeId")
NODE_NAME_KEYS: Tuple[str, ...] = ("name", "label", "title", "summary")
NODE_KIND_KEYS: Tuple[str, ...] = ("type", "node_type", "entity_type")

EDGE_SOURCE_KEYS: Tuple[str, ...] = (
    "source", "source_uuid", "source_node_uuid", "from_uuid", "from",
)
EDGE_TARGET_KEYS: Tuple[str, ...] = (
    "target", "target_uuid", "target_node_uuid", "to_uuid", "to",
)
EDGE_TYPE_KEYS: Tuple[str, ...] = (
    "type", "relationship", "relationship_type", "label",
)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class NormalizationConfig:
    """Configuration for record normalization."""
    node_id_prefix: str = NODE_ID_PREFIX
    default_relationship_type: str = DEFAULT_RELATIONSHIP_TYPE


_DEFAULT_CONFIG = NormalizationConfig()


# =============================================================================
# FIELD RESOLUTION
# =============================================================================

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """First value under `keys` that is neither None nor an empty string."""
    for key in keys:
        value = raw.get(key)
        if not _is_blank(value):
            return value
    return None


def _resolve_id(
    raw: Mapping[str, Any],
    keys: Sequence[str],
    prefix: str
) -> str:
    for key in keys:
        candidate = strip_node_prefix(raw.get(key), prefix)
        if candidate:
            return candidate
    return ""


def _string_labels(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(label for label in value if isinstance(label, str))


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def normalize_node_id(value: Any, prefix: str = NODE_ID_PREFIX) -> str:
    """Strip the transport prefix from a node id value ("" for None)."""
    return strip_node_prefix(value, prefix)


def resolve_node_kind(raw_type: Any, labels: Iterable[Any]) -> NodeKind:
    """
    Infer entity/episode classification.

    Type hint substring wins ("episode" before "entity"), then an exact
    case-insensitive "episode" label, else entity.
    """
    hint = raw_type.lower() if isinstance(raw_type, str) else ""
    if "episode" in hint:
        return NodeKind.EPISODE
    if "entity" in hint:
        return NodeKind.ENTITY
    for label in labels or ():
        if isinstance(label, str) and label.lower() == "episode":
            return NodeKind.EPISODE
    return NodeKind.ENTITY


def build_properties(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shallow-copy a record and flatten its nested `properties` object.

    Nested keys win over top-level keys of the same name.
    """
    merged = dict(raw)
    nested = raw.get("properties")
    if isinstance(nested, Mapping):
        merged.update(nested)
    return merged


def resolve_episode_refs(
    raw: Mapping[str, Any],
    prefix: str = NODE_ID_PREFIX
) -> Optional[Tuple[str, ...]]:
    """
    Episode ids evidencing a relationship, or None when absent/not a list.

    Read from top-level `episodes`, falling back to `properties.episodes`.
    """
    refs = raw.get("episodes")
    if refs is None:
        nested = raw.get("properties")
        if isinstance(nested, Mapping):
            refs = nested.get("episodes")
    if not isinstance(refs, (list, tuple)):
        return None
    return tuple(
        ref_id for ref_id in (strip_node_prefix(ref, prefix) for ref in refs)
        if ref_id
    )


def is_edge_record(raw: Any) -> bool:
    """A record is edge-shaped when both a source and a target alias hold a value."""
    if not isinstance(raw, Mapping):
        return False
    has_source = any(raw.get(key) is not None for key in EDGE_SOURCE_KEYS)
    has_target = any(raw.get(key) is not None for key in EDGE_TARGET_KEYS)
    return has_source and has_target


# =============================================================================
# NORMALIZERS
# =============================================================================

def normalize_node(
    raw: Any,
    config: Optional[NormalizationConfig] = None
) -> Optional[CanonicalNode]:
    """
    Normalize a raw node record.

    Returns None when no id can be resolved; callers skip the record.
    """
    if not isinstance(raw, Mapping):
        return None
    config = config or _DEFAULT_CONFIG

    node_id = _resolve_id(raw, NODE_ID_KEYS, config.node_id_prefix)
    if not node_id:
        return None

    labels = _string_labels(raw.get("labels"))
    name = _first_present(raw, NODE_NAME_KEYS)
    kind = resolve_node_kind(_first_present(raw, NODE_KIND_KEYS), labels)

    return CanonicalNode(
        node_id=node_id,
        name=node_id if name is None else str(name),
        kind=kind,
        labels=labels,
        properties=build_properties(raw),
        summary=_optional_str(raw.get("summary")),
        content=_optional_str(raw.get("content")),
        valid_at=raw.get("valid_at"),
    )


def normalize_edge(
    raw: Any,
    config: Optional[NormalizationConfig] = None
) -> Optional[CanonicalEdge]:
    """
    Normalize a raw edge record.

    Returns None unless both endpoints resolve to non-empty ids.
    """
    if not isinstance(raw, Mapping):
        return None
    config = config or _DEFAULT_CONFIG

    source_id = _resolve_id(raw, EDGE_SOURCE_KEYS, config.node_id_prefix)
    target_id = _resolve_id(raw, EDGE_TARGET_KEYS, config.node_id_prefix)
    if not source_id or not target_id:
        return None

    relationship = _first_present(raw, EDGE_TYPE_KEYS)

    return CanonicalEdge(
        source_id=source_id,
        target_id=target_id,
        relationship_type=(
            config.default_relationship_type if relationship is None
            else str(relationship)
        ),
        fact=_optional_str(raw.get("fact")),
        name=_optional_str(raw.get("name")),
        properties=build_properties(raw),
        episode_refs=resolve_episode_refs(raw, config.node_id_prefix),
    )
