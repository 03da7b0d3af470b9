"""Environment-driven settings, read at call time rather than import time."""
from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0
DEFAULT_COLOR_CAP = 5
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 2000


def _env_number(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        logger.warning("Invalid %s value %s; falling back to %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Non-positive %s value %s; falling back to %s", name, raw, default)
        return default
    return value


def fetch_timeout() -> float:
    return float(_env_number("BANNER_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT, float))


def color_cap() -> int:
    return int(_env_number("BANNER_COLOR_CAP", DEFAULT_COLOR_CAP, int))


def openai_api_key() -> str | None:
    value = os.getenv("OPENAI_API_KEY")
    return value.strip() if value else None


def model_name() -> str:
    """Return the configured OpenAI model name."""

    value = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
    return value.strip() or DEFAULT_MODEL


def max_tokens() -> int:
    return int(_env_number("OPENAI_MAX_TOKENS", DEFAULT_MAX_TOKENS, int))
