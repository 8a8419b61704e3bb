"""Prompt enhancement through the text model."""

from __future__ import annotations

from ..errors import EmptyInput, RemoteCallFailed
from ..providers import default_client
from ..providers.base import ModelClient
from ..runs.events import EventWriter
from .scene import SceneDetails

MANDATORY_PREFIX = "Ultra detailed and hyper realistic cinematic shot filmed by an ARRI camera"
IDENTITY_CONSTRAINT = "Maintain 100% facial identity and character consistency with the source reference image"
FALLBACK_DESCRIPTION = "Highly detailed cinematic scene."
MAX_WORDS = 80

ENHANCE_SYSTEM_INSTRUCTION = (
    "You are a world-class Director of Photography.\n"
    "Your task is to take brief descriptions and rewrite them into a cohesive, professional "
    "cinematic prompt description.\n"
    "\n"
    "Instructions:\n"
    "1. Describe the camera angle (e.g., low angle, wide shot, close-up).\n"
    "2. Describe the scene development, lighting (chiaroscuro, rim lighting), and mood.\n"
    "3. Describe the texture (8k, highly detailed).\n"
    f'4. DO NOT include the phrase "{MANDATORY_PREFIX}" or "{IDENTITY_CONSTRAINT}" in your output, '
    "as they will be added automatically.\n"
    f"5. Keep the result under {MAX_WORDS} words."
)


def build_enhance_message(scene: SceneDetails) -> str:
    lines = ["Create a cinematic description based on these details:"]
    lines.extend(f"- {label}: {value}" for label, value in scene.populated())
    return "\n".join(lines)


def with_mandatory_clauses(description: str) -> str:
    return f"{MANDATORY_PREFIX}. {IDENTITY_CONSTRAINT}. {description}"


def enhance_prompt(
    scene: SceneDetails,
    *,
    client: ModelClient | None = None,
    events: EventWriter | None = None,
) -> str:
    """Expand terse scene details into a cinematic description.

    Raises ``EmptyInput`` when every field is blank and ``MissingCredential``
    when no client can be built. A failed or empty model reply degrades to
    the fixed fallback description.
    """
    if scene.is_empty():
        raise EmptyInput("Fill in at least one scene field to use AI enhancement.")
    if client is None:
        client = default_client()
    try:
        generated = client.generate_text(
            build_enhance_message(scene),
            system_instruction=ENHANCE_SYSTEM_INSTRUCTION,
        )
    except (RemoteCallFailed, OSError) as exc:
        if events is not None:
            events.emit("enhance_degraded", error=str(exc), error_type=type(exc).__name__)
        return with_mandatory_clauses(FALLBACK_DESCRIPTION)
    description = str(generated or "").strip()
    return with_mandatory_clauses(description or FALLBACK_DESCRIPTION)
