"""Provider base types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, Union

from ..images import ImagePayload


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class InlineImagePart:
    data: bytes
    mime_type: str | None = None


@dataclass(frozen=True)
class OtherPart:
    kind: str


ResponsePart = Union[TextPart, InlineImagePart, OtherPart]
RequestPart = Union[ImagePayload, str]


class ChatHandle(Protocol):
    def send_message(self, message: str) -> str:
        ...


class ModelClient(Protocol):
    name: str

    def generate_image(self, parts: Sequence[RequestPart], *, aspect_ratio: str) -> list[ResponsePart]:
        ...

    def generate_text(self, message: str, *, system_instruction: str) -> str:
        ...

    def create_chat(self, *, system_instruction: str) -> ChatHandle:
        ...


def first_image_part(parts: Iterable[ResponsePart]) -> InlineImagePart | None:
    for part in parts:
        if isinstance(part, InlineImagePart) and part.data:
            return part
    return None


def joined_text(parts: Iterable[ResponsePart]) -> str:
    return "".join(part.text for part in parts if isinstance(part, TextPart)).strip()
