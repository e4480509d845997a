"""
Base Contracts and Shared Types

Foundational constants and identity helpers used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- No layer may define its own prefix or sentinel constants
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Final


# =============================================================================
# TRANSPORT / IDENTITY CONSTANTS
# =============================================================================

NODE_ID_PREFIX: Final[str] = "n:"
SYNTHETIC_EDGE_PREFIX: Final[str] = "ep:"
EDGE_ELEMENT_PREFIX: Final[str] = "e:"

DEFAULT_RELATIONSHIP_TYPE: Final[str] = "related_to"
MENTIONS_RELATIONSHIP: Final[str] = "MENTIONS"
MENTIONS_LABEL: Final[str] = "mentions"


# =============================================================================
# NODE KIND (inferred, never trusted from a single field)
# =============================================================================

class NodeKind(Enum):
    """Entity/episode classification of a canonical node."""
    ENTITY = "entity"
    EPISODE = "episode"


def strip_node_prefix(value: Any, prefix: str = NODE_ID_PREFIX) -> str:
    """
    Strip a leading transport prefix from a node identifier.

    None becomes the empty string; other values are stringified first.
    Only one leading prefix is removed.
    """
    if value is None:
        return ""
    text = str(value)
    if prefix and text.startswith(prefix):
        return text[len(prefix):]
    return text


def with_node_prefix(node_id: str, prefix: str = NODE_ID_PREFIX) -> str:
    """Add the transport prefix to a canonical node id."""
    return f"{prefix}{node_id}"
