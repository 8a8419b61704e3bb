"""Dry-run model client (offline)."""

from __future__ import annotations

import hashlib
from io import BytesIO
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from ..images import ImagePayload
from .base import InlineImagePart, RequestPart, ResponsePart, TextPart

_SIZES = {
    "16:9": (1344, 768),
    "9:16": (768, 1344),
    "1:1": (1024, 1024),
}


class DryRunChat:
    def __init__(self, system_instruction: str) -> None:
        self.system_instruction = system_instruction
        self.turns = 0

    def send_message(self, message: str) -> str:
        self.turns += 1
        return f"[dryrun turn {self.turns}] {message.strip()[:120]}"


class DryRunClient:
    name = "dryrun"

    def __init__(self) -> None:
        self._font = None

    def generate_image(self, parts: Sequence[RequestPart], *, aspect_ratio: str) -> list[ResponsePart]:
        instruction = next((part for part in reversed(parts) if isinstance(part, str)), "")
        image_count = sum(1 for part in parts if isinstance(part, ImagePayload))
        width, height = _SIZES.get(aspect_ratio, _SIZES["16:9"])
        image = Image.new("RGB", (width, height), _color_from_prompt(instruction))
        draw = ImageDraw.Draw(image)
        font = self._font or ImageFont.load_default()
        draw.text((20, 20), f"dryrun {aspect_ratio}\ninputs={image_count}", fill=(255, 255, 255), font=font)
        buffer = BytesIO()
        image.save(buffer, format="PNG")
        return [
            TextPart(text="dryrun"),
            InlineImagePart(data=buffer.getvalue(), mime_type="image/png"),
        ]

    def generate_text(self, message: str, *, system_instruction: str) -> str:
        details = [line.strip("- ").strip() for line in message.splitlines() if ":" in line and line.strip().startswith("-")]
        if not details:
            return "Medium shot, soft rim lighting, moody atmosphere, 8k texture detail."
        return "Low angle wide shot of " + "; ".join(details) + ", chiaroscuro rim lighting, 8k texture detail."

    def create_chat(self, *, system_instruction: str) -> DryRunChat:
        return DryRunChat(system_instruction)


def _color_from_prompt(prompt: str) -> tuple[int, int, int]:
    digest = hashlib.sha256(prompt.encode("utf-8")).digest()
    return digest[0], digest[1], digest[2]
