from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from cinemagic_engine.images import (
    ImagePayload,
    encode_for_export,
    export_filename,
    export_image,
    parse_data_uri,
    to_png_data_uri,
)
from cinemagic_engine.looks.catalog import LookId, get_look


def _png_bytes(mode: str = "RGB", color=(200, 40, 40)) -> bytes:
    buffer = BytesIO()
    Image.new(mode, (32, 18), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.mark.parametrize(
    ("prefix", "mime_type"),
    [
        ("data:image/png;base64,", "image/png"),
        ("data:image/jpeg;base64,", "image/jpeg"),
        ("data:image/jpg;base64,", "image/jpeg"),
        ("data:image/webp;base64,", "image/webp"),
        ("", "image/png"),
    ],
)
def test_parse_data_uri_strips_prefix(prefix: str, mime_type: str) -> None:
    payload = parse_data_uri(prefix + base64.b64encode(b"pixels").decode("ascii"))
    assert payload == ImagePayload(data=b"pixels", mime_type=mime_type)


def test_parse_data_uri_rejects_non_base64_uri() -> None:
    with pytest.raises(ValueError):
        parse_data_uri("data:image/png,rawtext")


def test_parse_data_uri_rejects_empty_payload() -> None:
    with pytest.raises(ValueError):
        parse_data_uri("data:image/png;base64,")


def test_output_always_declared_png() -> None:
    assert to_png_data_uri(b"jpeg-bytes").startswith("data:image/png;base64,")


def test_payload_from_path_detects_mime(tmp_path: Path) -> None:
    path = tmp_path / "still.JPG"
    path.write_bytes(b"jpeg")
    payload = ImagePayload.from_path(path)
    assert payload.mime_type == "image/jpeg"
    assert payload.data == b"jpeg"
    assert ImagePayload.from_data_uri(payload.to_data_uri()) == payload


def test_export_filename_uses_look_slug() -> None:
    look = get_look(LookId.DESERT_EPIC)
    assert export_filename(look, "png", timestamp_ms=1700000000000) == "cinemagic-dune-sands-1700000000000.png"
    assert export_filename(None, "jpeg", timestamp_ms=1).endswith("cinemagic-cinematic-1.jpg")
    with pytest.raises(ValueError):
        export_filename(look, "gif")


def test_png_export_is_byte_identical() -> None:
    data = _png_bytes()
    assert encode_for_export(to_png_data_uri(data), "png") == data


def test_jpg_export_flattens_alpha_over_black(tmp_path: Path) -> None:
    data = _png_bytes("RGBA", (255, 255, 255, 0))
    path = export_image(to_png_data_uri(data), "jpg", tmp_path, get_look(LookId.SCI_FI_NEON))

    assert path.name.startswith("cinemagic-neon-noir-")
    assert path.suffix == ".jpg"
    with Image.open(path) as image:
        assert image.format == "JPEG"
        assert image.size == (32, 18)
        red, green, blue = image.convert("RGB").getpixel((5, 5))
        assert red < 10 and green < 10 and blue < 10
