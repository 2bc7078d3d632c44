from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


@dataclass(frozen=True)
class Settings:
    api_key: str
    text_model: str
    image_model: str
    http_timeout_ms: int
    host: str
    port: int
    debug: bool


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", ""),
        text_model=os.environ.get("AURA_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
        image_model=os.environ.get("AURA_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        http_timeout_ms=_env_int("AURA_HTTP_TIMEOUT_MS", 300_000),
        host=os.environ.get("AURA_HOST") or "127.0.0.1",
        port=_env_int("AURA_PORT", 5001),
        debug=os.environ.get("AURA_DEBUG", "").lower() in {"1", "true", "yes"},
    )
