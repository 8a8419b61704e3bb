"""Model client selection."""

from __future__ import annotations

from ..utils import getenv_flag
from .base import ModelClient
from .dryrun import DryRunClient
from .gemini import GeminiClient


def default_client(*, dryrun: bool | None = None) -> ModelClient:
    if dryrun is None:
        dryrun = getenv_flag("CINEMAGIC_DRYRUN", False)
    if dryrun:
        return DryRunClient()
    return GeminiClient.from_env()
