"""Core Cinemagic engine orchestration."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from .chat.session import ChatSessionManager
from .chat.transcript import ChatTranscript, ChatTurn
from .errors import CinemagicError, MissingCredential, MissingReferenceImage
from .i18n import message
from .images import ImagePayload, export_image
from .looks.catalog import LookDefinition, LookId, get_look
from .prompts.composer import compose_instruction
from .prompts.enhance import enhance_prompt
from .prompts.scene import SceneDetails
from .providers import default_client
from .providers.base import ModelClient
from .runs.events import EventWriter
from .transform import transform_image


@dataclass
class TransformOutcome:
    look: LookDefinition
    image_uri: str | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.image_uri is not None


@dataclass
class EnhanceOutcome:
    prompt: str | None = None
    error: str | None = None


class CinemagicEngine:
    def __init__(
        self,
        events_path: Path | None = None,
        *,
        client: ModelClient | None = None,
        language: str = "en",
        session_id: str | None = None,
        chat_manager: ChatSessionManager | None = None,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        self.events = EventWriter(events_path, self.session_id)
        self.client = client
        self.language = language
        self.chat_manager = chat_manager or ChatSessionManager(client_factory=self._get_client)
        self.transcript = ChatTranscript()
        self.transcript.reset(message("chat_greeting", language))
        self.last_result: TransformOutcome | None = None
        self.events.emit("session_started", language=language)

    def _get_client(self) -> ModelClient:
        if self.client is None:
            self.client = default_client()
        return self.client

    def set_language(self, language: str) -> None:
        self.language = language
        # Only a transcript that still holds just the greeting is relabelled.
        if len(self.transcript) <= 1:
            self.transcript.reset(message("chat_greeting", language))

    def compose(
        self,
        look_id: LookId | str,
        instructions: str = "",
        scene: SceneDetails | None = None,
    ) -> str:
        look = get_look(look_id)
        return compose_instruction(look.look_id, instructions, scene, reference_mode=look.is_reference)

    def transform(
        self,
        source: ImagePayload,
        look_id: LookId | str,
        instructions: str = "",
        reference: ImagePayload | None = None,
        scene: SceneDetails | None = None,
    ) -> TransformOutcome:
        look = get_look(look_id)
        if look.is_reference and reference is None:
            self.events.emit("transform_rejected", look=look.look_id.value, reason="missing_reference")
            return TransformOutcome(
                look=look,
                error=message("error_reference", self.language),
                error_type=MissingReferenceImage.__name__,
            )

        # A previous result must not stay visible under the new look label.
        self.last_result = None
        self.events.emit(
            "transform_requested",
            look=look.look_id.value,
            has_reference=reference is not None,
            has_instructions=bool(str(instructions or "").strip()),
            source_mime=source.mime_type,
        )
        started_at = time.monotonic()
        try:
            image_uri = transform_image(
                source,
                look.look_id,
                instructions,
                reference,
                scene=scene,
                client=self._get_client(),
            )
        except CinemagicError as exc:
            self.events.emit(
                "transform_failed",
                look=look.look_id.value,
                error=str(exc),
                error_type=type(exc).__name__,
                elapsed_s=time.monotonic() - started_at,
            )
            outcome = TransformOutcome(
                look=look,
                error=message("error_generate", self.language),
                error_type=type(exc).__name__,
            )
        else:
            self.events.emit(
                "transform_completed",
                look=look.look_id.value,
                elapsed_s=time.monotonic() - started_at,
            )
            outcome = TransformOutcome(look=look, image_uri=image_uri)
        self.last_result = outcome
        return outcome

    def enhance(self, scene: SceneDetails) -> EnhanceOutcome:
        if scene.is_empty():
            return EnhanceOutcome(error=message("enhance_error", self.language))
        try:
            prompt = enhance_prompt(scene, client=self._get_client(), events=self.events)
        except MissingCredential as exc:
            self.events.emit("enhance_failed", error=str(exc), error_type=type(exc).__name__)
            return EnhanceOutcome(error=message("error_enhance", self.language))
        self.events.emit("enhance_completed", words=len(prompt.split()))
        return EnhanceOutcome(prompt=prompt)

    def chat(self, text: str) -> ChatTurn | None:
        cleaned = str(text or "").strip()
        if not cleaned:
            return None
        self.transcript.append_user(cleaned)
        try:
            reply = self.chat_manager.send(cleaned, conversation_id=self.session_id)
        except CinemagicError as exc:
            self.events.emit("chat_failed", error=str(exc), error_type=type(exc).__name__)
            return self.transcript.append_model(message("chat_apology", self.language))
        self.events.emit("chat_replied", chars=len(reply))
        return self.transcript.append_model(reply)

    def export(self, fmt: str, out_dir: Path) -> Path:
        outcome = self.last_result
        if outcome is None or outcome.image_uri is None:
            raise ValueError("No generated image to export.")
        path = export_image(outcome.image_uri, fmt, out_dir, outcome.look)
        self.events.emit("image_exported", path=str(path), format=fmt)
        return path

    def reset(self) -> None:
        self.last_result = None
        self.events.emit("session_reset")
