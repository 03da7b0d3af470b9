"""OpenAI client helpers for banner generation and SVG artifact validation."""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from . import config
from .errors import ArtifactFormatError, ConfigurationError, GenerationServiceError

logger = logging.getLogger(__name__)

DEFAULT_BANNER_SYSTEM_PROMPT = (
    "You are a graphic designer who produces social media banners as hand-written SVG. "
    "You always answer with a single, self-contained SVG document and nothing else."
)

_SVG_TAG = re.compile(r"<svg(?![\w:-])[^<>]*?(/?)>|</svg\s*>", re.IGNORECASE)


def _banner_system_prompt() -> str:
    return os.getenv("OPENAI_BANNER_SYSTEM_PROMPT", DEFAULT_BANNER_SYSTEM_PROMPT)


class GenerationClient(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class OpenAIGenerationClient:
    """Single-shot chat completion call; failures are not retried."""

    def __init__(
        self,
        api_key: str | None,
        model: str | None = None,
        client: Any | None = None,
        max_tokens: int | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is not set")
        self.model = model or config.model_name()
        self.max_tokens = max_tokens or config.max_tokens()
        # The SDK retries twice by default; the pipeline makes exactly one call.
        self._client = client if client is not None else OpenAI(api_key=api_key, max_retries=0)

    def generate(self, prompt: str) -> str:
        start = time.perf_counter()
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": _banner_system_prompt()},
                    {"role": "user", "content": prompt},
                ],
                max_completion_tokens=self.max_tokens,
            )
        except OpenAIError as exc:
            logger.error("OpenAI banner generation failed with %s: %s", self.model, exc)
            raise GenerationServiceError(f"Generation service call failed: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        if not choices or getattr(choices[0], "message", None) is None:
            logger.error("OpenAI returned no completion choices for %s", self.model)
            raise GenerationServiceError("Generation service returned no completion")
        content = choices[0].message.content or ""
        logger.info(
            "Generated banner markup with %s in %.2fs (%d chars)",
            self.model,
            time.perf_counter() - start,
            len(content),
        )
        logger.debug("LLM banner response: %s", content)
        return content


def get_generation_client() -> GenerationClient:
    """FastAPI dependency building a client from the environment of this request."""

    return OpenAIGenerationClient(api_key=config.openai_api_key())


def extract_svg(content: str) -> str:
    """Return the first balanced ``<svg>...</svg>`` fragment in ``content``.

    Surrounding prose and code fences are discarded. Nested ``<svg>`` elements
    stay inside their parent and a second sibling fragment is never merged
    into the first. An opening tag that is never closed is skipped in favour
    of the next one.
    """

    tags = list(_SVG_TAG.finditer(content or ""))
    for index, opening in enumerate(tags):
        if opening.group(0).startswith("</") or opening.group(1):
            continue
        depth = 0
        for tag in tags[index:]:
            if tag.group(0).startswith("</"):
                depth -= 1
            elif not tag.group(1):
                depth += 1
            if depth == 0:
                return content[opening.start() : tag.end()]
    logger.warning("No SVG fragment found in generated content (%d chars)", len(content or ""))
    raise ArtifactFormatError("No valid SVG found in AI response")
