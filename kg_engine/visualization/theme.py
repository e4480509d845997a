"""
Graph Theme

Node fill colors and edge label formatting for the render layer.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Final, Iterable, Mapping, Optional


EPISODE_COLOR: Final[str] = "#4fc5ff"
ENTITY_COLOR: Final[str] = "#99ff55"
USER_COLOR: Final[str] = "#ff7b48"
UNKNOWN_COLOR: Final[str] = "#ff4d4f"
EDGE_COLOR: Final[str] = "#555"


@dataclass(frozen=True)
class NodeColorConfig:
    """
    Caller-supplied color overrides.

    Any field left as None falls back to the documented default.
    """
    episode_color: Optional[str] = None
    entity_color: Optional[str] = None
    user_color: Optional[str] = None
    unknown_color: Optional[str] = None

    @classmethod
    def from_mapping(cls, overrides: Optional[Mapping[str, Any]]) -> NodeColorConfig:
        """Build from a dict using either snake_case or camelCase keys."""
        if not overrides:
            return cls()

        def pick(snake: str, camel: str) -> Optional[str]:
            value = overrides.get(snake, overrides.get(camel))
            return value if isinstance(value, str) and value else None

        return cls(
            episode_color=pick("episode_color", "episodeColor"),
            entity_color=pick("entity_color", "entityColor"),
            user_color=pick("user_color", "userColor"),
            unknown_color=pick("unknown_color", "unknownColor"),
        )

    def resolved(self) -> ResolvedNodeColors:
        return ResolvedNodeColors(
            episode=self.episode_color or EPISODE_COLOR,
            entity=self.entity_color or ENTITY_COLOR,
            user=self.user_color or USER_COLOR,
            unknown=self.unknown_color or UNKNOWN_COLOR,
        )


@dataclass(frozen=True)
class ResolvedNodeColors:
    episode: str = EPISODE_COLOR
    entity: str = ENTITY_COLOR
    user: str = USER_COLOR
    unknown: str = UNKNOWN_COLOR


def has_user_label(labels: Any) -> bool:
    if not isinstance(labels, (list, tuple, set, frozenset)):
        return False
    return any(isinstance(label, str) and label.lower() == "user" for label in labels)


def resolve_node_color(
    node_type: Any,
    labels: Optional[Iterable[Any]],
    colors: Optional[ResolvedNodeColors] = None
) -> str:
    """
    Fill color by precedence: user label, then episode, entity, unknown.

    A "user" label wins regardless of node type.
    """
    colors = colors or ResolvedNodeColors()
    if has_user_label(labels):
        return colors.user
    kind = node_type.lower() if isinstance(node_type, str) else ""
    if kind == "episode":
        return colors.episode
    if kind == "entity":
        return colors.entity
    return colors.unknown


def edge_display_label(label: Optional[str]) -> str:
    """RELATED_TO -> "related to"."""
    if not label:
        return ""
    return label.lower().replace("_", " ")
