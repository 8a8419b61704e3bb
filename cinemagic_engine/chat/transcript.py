"""Caller-owned chat transcript."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Role = Literal["user", "model"]


@dataclass(frozen=True)
class ChatTurn:
    role: Role
    text: str


@dataclass
class ChatTranscript:
    turns: list[ChatTurn] = field(default_factory=list)

    def append_user(self, text: str) -> ChatTurn:
        return self._append(ChatTurn(role="user", text=text))

    def append_model(self, text: str) -> ChatTurn:
        return self._append(ChatTurn(role="model", text=text))

    def reset(self, greeting: str | None = None) -> None:
        self.turns.clear()
        if greeting:
            self.append_model(greeting)

    def _append(self, turn: ChatTurn) -> ChatTurn:
        self.turns.append(turn)
        return turn

    def __len__(self) -> int:
        return len(self.turns)
