"""Structured director's notes."""

from __future__ import annotations

from dataclasses import dataclass

SCENE_FIELDS: tuple[tuple[str, str], ...] = (
    ("character", "Character"),
    ("clothing", "Clothing"),
    ("action", "Action"),
    ("setting", "Setting"),
)


@dataclass(frozen=True)
class SceneDetails:
    character: str | None = None
    clothing: str | None = None
    action: str | None = None
    setting: str | None = None

    def populated(self) -> list[tuple[str, str]]:
        """Return (label, value) for every non-blank field, in fixed order."""
        fields: list[tuple[str, str]] = []
        for attr, label in SCENE_FIELDS:
            value = str(getattr(self, attr) or "").strip()
            if value:
                fields.append((label, value))
        return fields

    def is_empty(self) -> bool:
        return not self.populated()
