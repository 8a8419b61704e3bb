"""Image payloads, data URIs, and export re-encoding."""

from __future__ import annotations

import base64
import binascii
import re
import time
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image

from .looks.catalog import LookDefinition, look_slug

OUTPUT_MIME_TYPE = "image/png"
OUTPUT_DATA_URI_PREFIX = f"data:{OUTPUT_MIME_TYPE};base64,"
EXPORT_FORMATS = ("png", "jpg")
JPEG_QUALITY = 95

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(?:;[^;,]*)*?);base64,", re.IGNORECASE)


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = OUTPUT_MIME_TYPE

    @classmethod
    def from_data_uri(cls, value: str) -> "ImagePayload":
        return parse_data_uri(value)

    @classmethod
    def from_path(cls, path: str | Path) -> "ImagePayload":
        source = Path(path)
        mime_type = mime_type_for_suffix(source.suffix) or OUTPUT_MIME_TYPE
        return cls(data=source.read_bytes(), mime_type=mime_type)

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def parse_data_uri(value: str) -> ImagePayload:
    """Strip the ``data:<mime>;base64,`` framing and decode the payload.

    Bare base64 (no framing) is accepted and tagged as PNG.
    """
    raw = str(value or "").strip()
    mime_type = OUTPUT_MIME_TYPE
    match = _DATA_URI_RE.match(raw)
    if match:
        mime_type = (match.group("mime") or OUTPUT_MIME_TYPE).lower()
        raw = raw[match.end() :]
    elif raw.startswith("data:"):
        raise ValueError("Only base64 data URIs are supported.")
    if mime_type == "image/jpg":
        mime_type = "image/jpeg"
    try:
        data = base64.b64decode(raw, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"Invalid base64 image payload: {exc}") from exc
    if not data:
        raise ValueError("Empty image payload.")
    return ImagePayload(data=data, mime_type=mime_type)


def to_png_data_uri(data: bytes) -> str:
    # Output is always declared PNG regardless of what the model produced.
    return OUTPUT_DATA_URI_PREFIX + base64.b64encode(data).decode("ascii")


def mime_type_for_suffix(suffix: str) -> str | None:
    lowered = str(suffix or "").strip().lower()
    if lowered == ".png":
        return "image/png"
    if lowered in {".jpg", ".jpeg"}:
        return "image/jpeg"
    if lowered == ".webp":
        return "image/webp"
    return None


def export_filename(look: LookDefinition | None, fmt: str, *, timestamp_ms: int | None = None) -> str:
    stamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    return f"cinemagic-{look_slug(look)}-{stamp}.{_normalize_export_format(fmt)}"


def encode_for_export(data_uri: str, fmt: str) -> bytes:
    fmt = _normalize_export_format(fmt)
    payload = parse_data_uri(data_uri)
    if fmt == "png":
        return payload.data
    with Image.open(BytesIO(payload.data)) as image:
        rgba = image.convert("RGBA")
        # JPEG has no alpha; composite over black.
        canvas = Image.new("RGB", rgba.size, (0, 0, 0))
        canvas.paste(rgba, mask=rgba.split()[-1])
        buffer = BytesIO()
        canvas.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    return buffer.getvalue()


def export_image(
    data_uri: str,
    fmt: str,
    out_dir: str | Path,
    look: LookDefinition | None = None,
) -> Path:
    target_dir = Path(out_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(look, fmt)
    path.write_bytes(encode_for_export(data_uri, fmt))
    return path


def _normalize_export_format(fmt: str) -> str:
    lowered = str(fmt or "").strip().lower()
    if lowered == "jpeg":
        lowered = "jpg"
    if lowered not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    return lowered
