"""Image transform requests against the image model."""

from __future__ import annotations

from .errors import MissingReferenceImage, NoImageProduced
from .images import ImagePayload, to_png_data_uri
from .looks.catalog import LookId, get_look
from .prompts.composer import TARGET_ASPECT_RATIO, compose_instruction
from .prompts.scene import SceneDetails
from .providers import default_client
from .providers.base import ModelClient, RequestPart, first_image_part


def build_request_parts(
    source: ImagePayload,
    instruction: str,
    reference: ImagePayload | None = None,
) -> list[RequestPart]:
    parts: list[RequestPart] = [source]
    if reference is not None:
        parts.append(reference)
    parts.append(instruction)
    return parts


def request_image(
    client: ModelClient,
    source: ImagePayload,
    instruction: str,
    reference: ImagePayload | None = None,
    *,
    aspect_ratio: str = TARGET_ASPECT_RATIO,
) -> str:
    """Send one transform request and return the first image as a PNG data URI.

    Makes exactly one call through ``client``. Transport errors surface as
    ``RemoteCallFailed`` from the client; a response without an image part
    raises ``NoImageProduced``.
    """
    if not instruction or not instruction.strip():
        raise ValueError("instruction must be a non-empty string")
    parts = build_request_parts(source, instruction, reference)
    response_parts = client.generate_image(parts, aspect_ratio=aspect_ratio)
    image = first_image_part(response_parts)
    if image is None:
        raise NoImageProduced("No image generated in the response.")
    return to_png_data_uri(image.data)


def transform_image(
    source: ImagePayload,
    look_id: LookId | str,
    instruction: str = "",
    reference: ImagePayload | None = None,
    *,
    scene: SceneDetails | None = None,
    client: ModelClient | None = None,
) -> str:
    look = get_look(look_id)
    if look.is_reference and reference is None:
        raise MissingReferenceImage("Reference Match requires a reference image.")
    composed = compose_instruction(look.look_id, instruction, scene, reference_mode=look.is_reference)
    if client is None:
        client = default_client()
    return request_image(
        client,
        source,
        composed,
        reference if look.is_reference else None,
    )
