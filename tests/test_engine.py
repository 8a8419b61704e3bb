from __future__ import annotations

import json
from pathlib import Path

from cinemagic_engine.chat.session import ChatSessionManager
from cinemagic_engine.engine import CinemagicEngine
from cinemagic_engine.errors import NoImageProduced, RemoteCallFailed
from cinemagic_engine.i18n import message
from cinemagic_engine.images import ImagePayload
from cinemagic_engine.looks.catalog import LookId
from cinemagic_engine.prompts.enhance import MANDATORY_PREFIX
from cinemagic_engine.prompts.scene import SceneDetails
from cinemagic_engine.providers.base import InlineImagePart, TextPart


class FakeChat:
    def __init__(self, owner: "FakeClient") -> None:
        self.owner = owner

    def send_message(self, message: str) -> str:
        if self.owner.chat_error is not None:
            raise self.owner.chat_error
        return f"echo: {message}"


class FakeClient:
    name = "fake"

    def __init__(self) -> None:
        self.image_responses: list = []
        self.image_calls = 0
        self.text_reply = "Dutch angle, hard key light."
        self.chat_error: Exception | None = None
        self.chats_created = 0

    def generate_image(self, parts, *, aspect_ratio):
        self.image_calls += 1
        response = self.image_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def generate_text(self, message, *, system_instruction):
        return self.text_reply

    def create_chat(self, *, system_instruction):
        self.chats_created += 1
        return FakeChat(self)


SOURCE = ImagePayload(b"source", "image/png")


def _events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_transform_success_records_result_and_events(tmp_path: Path) -> None:
    events_path = tmp_path / "events.jsonl"
    client = FakeClient()
    client.image_responses.append([InlineImagePart(b"frame", "image/png")])
    engine = CinemagicEngine(events_path, client=client)

    outcome = engine.transform(SOURCE, LookId.SCI_FI_NEON, "Looking over shoulder")

    assert outcome.ok
    assert outcome.image_uri.startswith("data:image/png;base64,")
    assert engine.last_result is outcome
    types = [event["type"] for event in _events(events_path)]
    assert types == ["session_started", "transform_requested", "transform_completed"]


def test_transform_failure_is_translated(tmp_path: Path) -> None:
    events_path = tmp_path / "events.jsonl"
    client = FakeClient()
    client.image_responses.append([TextPart("refused")])
    engine = CinemagicEngine(events_path, client=client, language="es")

    outcome = engine.transform(SOURCE, LookId.SPACE_OPERA)

    assert not outcome.ok
    assert outcome.error == message("error_generate", "es")
    assert outcome.error_type == NoImageProduced.__name__
    failed = [event for event in _events(events_path) if event["type"] == "transform_failed"]
    assert failed and failed[0]["error_type"] == "NoImageProduced"


def test_new_transform_clears_previous_result() -> None:
    client = FakeClient()
    client.image_responses.append([InlineImagePart(b"first", "image/png")])
    client.image_responses.append(RemoteCallFailed("boom"))
    engine = CinemagicEngine(client=client)

    first = engine.transform(SOURCE, LookId.SCI_FI_NEON)
    assert engine.last_result is first
    second = engine.transform(SOURCE, LookId.POST_APOCALYPTIC)

    assert engine.last_result is second
    assert engine.last_result.image_uri is None
    assert engine.last_result.look.look_id is LookId.POST_APOCALYPTIC


def test_missing_reference_rejected_without_call(tmp_path: Path) -> None:
    events_path = tmp_path / "events.jsonl"
    client = FakeClient()
    engine = CinemagicEngine(events_path, client=client)

    outcome = engine.transform(SOURCE, LookId.CUSTOM_GRADIENT)

    assert outcome.error == message("error_reference", "en")
    assert outcome.error_type == "MissingReferenceImage"
    assert client.image_calls == 0
    assert "transform_rejected" in [event["type"] for event in _events(events_path)]


def test_enhance_outcomes() -> None:
    engine = CinemagicEngine(client=FakeClient(), language="es")
    empty = engine.enhance(SceneDetails())
    assert empty.prompt is None
    assert empty.error == message("enhance_error", "es")

    filled = engine.enhance(SceneDetails(character="Spy"))
    assert filled.error is None
    assert filled.prompt.startswith(MANDATORY_PREFIX)
    assert filled.prompt.endswith("Dutch angle, hard key light.")


def test_chat_appends_turns_in_order_and_reuses_session() -> None:
    client = FakeClient()
    engine = CinemagicEngine(client=client)

    engine.chat("What is a T-stop?")
    engine.chat("And ND filters?")

    roles = [turn.role for turn in engine.transcript.turns]
    assert roles == ["model", "user", "model", "user", "model"]
    assert engine.transcript.turns[2].text == "echo: What is a T-stop?"
    assert client.chats_created == 1


def test_chat_failure_appends_localized_apology(tmp_path: Path) -> None:
    events_path = tmp_path / "events.jsonl"
    client = FakeClient()
    client.chat_error = RemoteCallFailed("offline")
    engine = CinemagicEngine(events_path, client=client, language="es")

    turn = engine.chat("Hola")

    assert turn.role == "model"
    assert turn.text == message("chat_apology", "es")
    assert "chat_failed" in [event["type"] for event in _events(events_path)]
    client.chat_error = None
    assert engine.chat("¿Sigues ahí?").text == "echo: ¿Sigues ahí?"
    assert client.chats_created == 1


def test_blank_chat_message_is_ignored() -> None:
    engine = CinemagicEngine(client=FakeClient())
    assert engine.chat("   ") is None
    assert len(engine.transcript) == 1


def test_engine_uses_injected_chat_manager() -> None:
    client = FakeClient()
    manager = ChatSessionManager(client)
    engine = CinemagicEngine(client=FakeClient(), chat_manager=manager, session_id="abc")
    engine.chat("hello")
    assert manager.has_session("abc")
    assert client.chats_created == 1


def test_set_language_relabels_untouched_greeting() -> None:
    engine = CinemagicEngine(client=FakeClient())
    engine.set_language("es")
    assert engine.transcript.turns[0].text == message("chat_greeting", "es")


def test_export_writes_last_result(tmp_path: Path) -> None:
    from io import BytesIO

    from PIL import Image

    buffer = BytesIO()
    Image.new("RGB", (16, 9), (10, 20, 30)).save(buffer, format="PNG")
    client = FakeClient()
    client.image_responses.append([InlineImagePart(buffer.getvalue(), "image/png")])
    engine = CinemagicEngine(client=client)
    engine.transform(SOURCE, LookId.DYSTOPIAN_MATRIX)

    path = engine.export("png", tmp_path / "out")

    assert path.name.startswith("cinemagic-system-code-")
    assert path.read_bytes() == buffer.getvalue()


def test_enhance_without_credentials_reports_localized_error(monkeypatch, tmp_path: Path) -> None:
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY", "CINEMAGIC_DRYRUN"):
        monkeypatch.delenv(name, raising=False)
    events_path = tmp_path / "events.jsonl"
    engine = CinemagicEngine(events_path, language="es")

    outcome = engine.enhance(SceneDetails(character="Astronaut"))

    assert outcome.prompt is None
    assert outcome.error == message("error_enhance", "es")
    failed = [event for event in _events(events_path) if event["type"] == "enhance_failed"]
    assert failed and failed[0]["error_type"] == "MissingCredential"
    assert engine.enhance(SceneDetails()).error == message("enhance_error", "es")


def test_enhance_shares_cached_client(monkeypatch) -> None:
    built: list[FakeClient] = []

    def fake_default_client() -> FakeClient:
        client = FakeClient()
        client.image_responses.append([InlineImagePart(b"frame", "image/png")])
        built.append(client)
        return client

    monkeypatch.setattr("cinemagic_engine.engine.default_client", fake_default_client)
    engine = CinemagicEngine()

    engine.enhance(SceneDetails(character="Spy"))
    engine.enhance(SceneDetails(setting="Casino"))
    engine.transform(SOURCE, LookId.SCI_FI_NEON)

    assert len(built) == 1
    assert built[0].image_calls == 1
