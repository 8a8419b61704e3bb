"""Look catalog exports."""

from __future__ import annotations

from .catalog import (
    DEFAULT_LOOK_ID,
    REFERENCE_LOOK_ID,
    LookDefinition,
    LookId,
    get_look,
    list_looks,
    look_slug,
)

__all__ = [
    "DEFAULT_LOOK_ID",
    "REFERENCE_LOOK_ID",
    "LookDefinition",
    "LookId",
    "get_look",
    "list_looks",
    "look_slug",
]
