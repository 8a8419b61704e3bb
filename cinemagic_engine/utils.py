"""Shared utilities for the Cinemagic engine."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
import tomllib
from typing import Any, Mapping

_BINARY_KEYS = {"data", "image", "image_bytes", "image_uri", "source", "reference"}


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def sanitize_payload(payload: Any) -> Any:
    if payload is None:
        return None
    if isinstance(payload, (str, int, float, bool)):
        if isinstance(payload, str) and payload.startswith("data:"):
            return f"<data-uri:{len(payload)}>"
        return payload
    if isinstance(payload, (bytes, bytearray)):
        return f"<bytes:{len(payload)}>"
    if isinstance(payload, Mapping):
        sanitized: dict[str, Any] = {}
        for key, value in payload.items():
            if str(key).lower() in _BINARY_KEYS and isinstance(value, (bytes, bytearray, str)):
                sanitized[str(key)] = "<omitted>"
                continue
            sanitized[str(key)] = sanitize_payload(value)
        return sanitized
    if isinstance(payload, (list, tuple)):
        return [sanitize_payload(item) for item in payload]
    return str(payload)


def getenv_flag(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def getenv_language(key: str = "CINEMAGIC_LANGUAGE", default: str = "en") -> str:
    raw = str(os.getenv(key) or "").strip().lower()
    if raw.startswith("es"):
        return "es"
    if raw.startswith("en"):
        return "en"
    return default


def load_dotenv(path: Path | None = None, override: bool = False) -> bool:
    env_path = path or _default_env_path()
    if not env_path.exists():
        return False
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[7:].strip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        if value and value[0] == value[-1] and value.startswith(("\"", "'")):
            value = value[1:-1]
        if not override and key in os.environ:
            continue
        os.environ[key] = value
    return True


def _default_env_path() -> Path:
    cwd = Path.cwd()
    repo_root = _find_repo_root(cwd)
    if repo_root:
        env_path = repo_root / ".env"
        if env_path.exists():
            return env_path
    return cwd / ".env"


def _find_repo_root(start: Path) -> Path | None:
    for current in (start,) + tuple(start.parents):
        if (current / "cinemagic_engine").is_dir():
            return current
        pyproject = current / "pyproject.toml"
        if pyproject.exists():
            try:
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError:
                continue
            if data.get("project", {}).get("name") == "cinemagic":
                return current
    return None
