"""
Engine Configuration

Per-layer configuration dataclasses aggregated into one EngineConfig.
Environment overrides use the KGE_ prefix; a .env file is honoured.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Callable, Mapping, Optional, TypeVar
import os

from dotenv import load_dotenv

from .analytics import AnalyticsConfig
from .normalization import NormalizationConfig
from .visualization import NodeColorConfig, VisualizationConfig


ENV_PREFIX = "KGE_"

T = TypeVar("T")


@dataclass(frozen=True)
class EngineConfig:
    """Unified configuration for the whole engine."""
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    node_colors: NodeColorConfig = field(default_factory=NodeColorConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    include_episodic_edges: bool = True

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True
    ) -> EngineConfig:
        """
        Build a config from KGE_* variables over the defaults.

        Raises ValueError naming the variable when a value is malformed.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        def read(name: str, parse: Callable[[str], T]) -> Optional[T]:
            raw = environ.get(f"{ENV_PREFIX}{name}")
            if raw is None or raw.strip() == "":
                return None
            try:
                return parse(raw.strip())
            except ValueError as exc:
                raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from exc

        defaults = cls()

        visualization_overrides = {
            key: value for key, value in {
                "min_node_size": read("MIN_NODE_SIZE", float),
                "max_node_size": read("MAX_NODE_SIZE", float),
                "label_max_length": read("LABEL_MAX_LENGTH", int),
                "position_extent": read("POSITION_EXTENT", float),
                "position_seed": read("POSITION_SEED", int),
                "edge_color": read("EDGE_COLOR", str),
            }.items() if value is not None
        }

        hub_limit = read("HUB_LIMIT", int)
        relationship_default = read("DEFAULT_RELATIONSHIP_TYPE", str)
        include_episodic = read("INCLUDE_EPISODIC_EDGES", _parse_bool)

        return cls(
            normalization=(
                NormalizationConfig(default_relationship_type=relationship_default)
                if relationship_default is not None else defaults.normalization
            ),
            visualization=replace(defaults.visualization, **visualization_overrides),
            node_colors=NodeColorConfig(
                episode_color=read("EPISODE_COLOR", str),
                entity_color=read("ENTITY_COLOR", str),
                user_color=read("USER_COLOR", str),
                unknown_color=read("UNKNOWN_COLOR", str),
            ),
            analytics=(
                AnalyticsConfig(hub_limit=hub_limit) if hub_limit is not None
                else defaults.analytics
            ),
            include_episodic_edges=(
                defaults.include_episodic_edges if include_episodic is None
                else include_episodic
            ),
        )


def _parse_bool(raw: str) -> bool:
    value = raw.lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(raw)
