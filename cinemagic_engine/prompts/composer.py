"""Instruction text sent alongside the image parts."""

from __future__ import annotations

from ..looks.catalog import LookId, get_look
from .scene import SceneDetails

TARGET_ASPECT_RATIO = "16:9"

FRAMING_DIRECTIVE = (
    "Transform this image into a hyper-realistic, ultra-detailed, cinematic movie shot "
    f"in {TARGET_ASPECT_RATIO} aspect ratio."
)

IDENTITY_DIRECTIVE = (
    "CRITICAL IDENTITY INSTRUCTION (PRIORITY #1):\n"
    "- You MUST preserve the facial identity and body structure of the person in the source "
    "image with 100% accuracy.\n"
    "- The final image MUST use the exact face from the source image. Do NOT generate a random person.\n"
    "- Do not alter the facial features, bone structure, or likeness.\n"
    "- The goal is to keep the person exactly as they are but upgrade the lighting, camera quality, "
    "and environment around them."
)

UPSCALE_DIRECTIVE = (
    "CRITICAL UPSCALE & STYLE INSTRUCTIONS:\n"
    "- Ensure the output looks like it was filmed with an ARRI camera.\n"
    "- Enhance details and resolution significantly (x2 upscale equivalent).\n"
    "- Maximize image clarity, sharpness, and texture definition.\n"
    "- Refine line definitions and facial features with high precision without deforming them.\n"
    "- Re-stylize the image to obtain the maximum possible clarity and sharpness.\n"
    '- Apply "High-Frequency Detail Enhancement" to make every texture, pore, and edge crystal clear.\n'
    "- Ensure the final image is ultra-sharp, in focus, and free of any blur or softness.\n"
    "- Micro-contrast should be optimized for a hyper-realistic look."
)

REFERENCE_STYLE_CLAUSE = (
    "CRITICAL COLOR INSTRUCTION: Analyze the color palette, lighting, and mood of the SECOND image "
    "provided (the reference). Derive the color grade, lighting, and mood from the second image and "
    "apply that exact color grading and style to the FIRST image (the source)."
)

PRECEDENCE_CLAUSE = (
    "Ensure these instructions take precedence over the base style regarding the scene, action, "
    "and clothing, BUT NEVER compromise the facial identity of the source."
)

CREATIVE_VARIATION_CLAUSE = (
    "No specific user instructions provided. Generate a creative variation based on the style "
    "definition while keeping the source character."
)

SCENE_DELIMITER = ". "


def compose_instruction(
    look_id: LookId | str,
    override_text: str | None = None,
    scene: SceneDetails | None = None,
    reference_mode: bool = False,
) -> str:
    """Build the full instruction for one transform request.

    The result depends only on the arguments. The identity directive is
    always present; the override text wins over scene details when both
    are given.
    """
    look = get_look(look_id)
    sections = [FRAMING_DIRECTIVE, IDENTITY_DIRECTIVE, UPSCALE_DIRECTIVE]
    if reference_mode:
        sections.append(REFERENCE_STYLE_CLAUSE)
    else:
        sections.append(f"Style Base: {look.name}.\nTechnical Details: {look.prompt_modifier}")
    sections.append(directors_notes_clause(override_text, scene))
    return "\n\n".join(sections)


def directors_notes_clause(override_text: str | None, scene: SceneDetails | None) -> str:
    notes = str(override_text or "").strip()
    if not notes and scene is not None:
        notes = scene_summary(scene)
    if not notes:
        return CREATIVE_VARIATION_CLAUSE
    return f"DIRECTOR'S SPECIFIC INSTRUCTIONS: {notes}\n{PRECEDENCE_CLAUSE}"


def scene_summary(scene: SceneDetails) -> str:
    return SCENE_DELIMITER.join(f"{label}: {value}" for label, value in scene.populated())
