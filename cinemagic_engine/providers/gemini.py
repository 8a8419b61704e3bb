"""Gemini client for image transforms, text, and chat."""

from __future__ import annotations

import base64
import binascii
import os
from typing import Any, Sequence

try:
    from google import genai  # type: ignore
    from google.genai import types  # type: ignore
except Exception:  # pragma: no cover
    genai = None  # type: ignore
    types = None  # type: ignore

from ..errors import MissingCredential, RemoteCallFailed
from ..images import ImagePayload
from .base import InlineImagePart, OtherPart, RequestPart, ResponsePart, TextPart, joined_text

IMAGE_MODEL = "gemini-2.5-flash-image"
TEXT_MODEL = "gemini-3-pro-preview"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def resolve_api_key() -> str | None:
    for name in API_KEY_ENV_VARS:
        value = str(os.getenv(name) or "").strip()
        if value:
            return value
    return None


class GeminiChatHandle:
    def __init__(self, chat: Any) -> None:
        self._chat = chat

    def send_message(self, message: str) -> str:
        try:
            response = self._chat.send_message(message)
        except Exception as exc:
            raise RemoteCallFailed(f"Gemini chat request failed: {exc}") from exc
        return _response_text(response)


class GeminiClient:
    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        *,
        image_model: str = IMAGE_MODEL,
        text_model: str = TEXT_MODEL,
        sdk_client: Any | None = None,
    ) -> None:
        if not api_key:
            raise MissingCredential("GEMINI_API_KEY, GOOGLE_API_KEY or API_KEY not set.")
        if sdk_client is None:
            if genai is None:
                raise RuntimeError("google-genai package not installed. Run: pip install google-genai")
            sdk_client = genai.Client(api_key=api_key)
        self._client = sdk_client
        self.image_model = image_model
        self.text_model = text_model

    @classmethod
    def from_env(cls, **kwargs: Any) -> "GeminiClient":
        return cls(resolve_api_key(), **kwargs)

    def generate_image(self, parts: Sequence[RequestPart], *, aspect_ratio: str) -> list[ResponsePart]:
        _require_sdk()
        try:
            response = self._client.models.generate_content(
                model=self.image_model,
                contents=_build_contents(parts),
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE"],
                    candidate_count=1,
                    image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
                ),
            )
        except Exception as exc:
            raise RemoteCallFailed(f"Gemini image request failed: {exc}") from exc
        return normalize_response_parts(response)

    def generate_text(self, message: str, *, system_instruction: str) -> str:
        _require_sdk()
        try:
            response = self._client.models.generate_content(
                model=self.text_model,
                contents=message,
                config=types.GenerateContentConfig(system_instruction=system_instruction),
            )
        except Exception as exc:
            raise RemoteCallFailed(f"Gemini text request failed: {exc}") from exc
        return _response_text(response)

    def create_chat(self, *, system_instruction: str) -> GeminiChatHandle:
        _require_sdk()
        try:
            chat = self._client.chats.create(
                model=self.text_model,
                config=types.GenerateContentConfig(system_instruction=system_instruction),
            )
        except Exception as exc:
            raise RemoteCallFailed(f"Gemini chat session could not be created: {exc}") from exc
        return GeminiChatHandle(chat)


def normalize_response_parts(response: Any) -> list[ResponsePart]:
    """Flatten every candidate's parts into typed variants, in order."""
    parts: list[ResponsePart] = []
    candidates = getattr(response, "candidates", None) or []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        raw_parts = getattr(content, "parts", None) or getattr(candidate, "parts", None) or []
        for raw in raw_parts:
            parts.append(_normalize_part(raw))
    return parts


def _normalize_part(raw: Any) -> ResponsePart:
    if getattr(raw, "thought", None):
        return OtherPart(kind="thought")
    inline_data = getattr(raw, "inline_data", None)
    data = getattr(inline_data, "data", None) if inline_data is not None else None
    if data is not None:
        mime_type = getattr(inline_data, "mime_type", None)
        if isinstance(data, str):
            try:
                data = base64.b64decode(data)
            except (binascii.Error, ValueError):
                return OtherPart(kind="inline_data")
        if mime_type and not str(mime_type).startswith("image/"):
            return OtherPart(kind=str(mime_type))
        return InlineImagePart(data=bytes(data), mime_type=mime_type)
    text = getattr(raw, "text", None)
    if isinstance(text, str):
        return TextPart(text=text)
    return OtherPart(kind=type(raw).__name__)


def _build_contents(parts: Sequence[RequestPart]) -> list[Any]:
    contents: list[Any] = []
    for entry in parts:
        if isinstance(entry, ImagePayload):
            contents.append(
                types.Part(inline_data=types.Blob(data=entry.data, mime_type=entry.mime_type))
            )
            continue
        contents.append(types.Part(text=str(entry)))
    return contents


def _response_text(response: Any) -> str:
    parts = normalize_response_parts(response)
    text = joined_text(parts)
    if text:
        return text
    try:
        fallback = getattr(response, "text", None)
    except Exception:
        fallback = None
    return fallback.strip() if isinstance(fallback, str) else ""


def _require_sdk() -> None:
    if types is None:
        raise RuntimeError("google-genai package not installed. Run: pip install google-genai")
