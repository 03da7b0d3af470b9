"""Fetch, extract, prompt, generate, validate, and assemble a banner."""
from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Sequence, Tuple

from .llm import GenerationClient, extract_svg
from .prompts import build_banner_prompt
from .schemas import BannerResult, GenerationDirective, WebDocumentContent
from .scrape import extract_page_content, fetch_page

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Tuple[str, str]]

# Two-colour fallback per template: a primary and a contrasting accent.
DEFAULT_PALETTES: Dict[str, Tuple[str, str]] = {
    "modern": ("#3B82F6", "#14B8A6"),
    "minimal": ("#1F2937", "#6B7280"),
    "gradient": ("#FF6B6B", "#4ECDC4"),
    "bold": ("#E74C3C", "#3498DB"),
}


def resolve_palette(extracted: Sequence[str], template: str) -> List[str]:
    """Return exactly two colours, preferring those found on the page."""

    palette = list(DEFAULT_PALETTES[template])
    if len(extracted) >= 2:
        palette = list(extracted[:2])
    elif len(extracted) == 1:
        palette[0] = extracted[0]
    return palette


def assemble_result(content: WebDocumentContent, template: str, svg_content: str) -> BannerResult:
    return BannerResult(
        title=content.title,
        description=content.description,
        colors=resolve_palette(content.extracted_colors, template),
        keywords=list(content.keywords),
        svg_content=svg_content,
    )


def generate_banner(
    directive: GenerationDirective,
    generation_client: GenerationClient,
    fetcher: Fetcher | None = None,
) -> BannerResult:
    """Run the whole pipeline for one request.

    The page fetch finishes before the generation call starts. Nothing is
    retried and nothing is cached; any failure propagates to the caller as a
    ``BannerError`` subclass.
    """

    fetch = fetcher or fetch_page
    start = time.perf_counter()
    logger.info("Generating %s banner for %s", directive.template, directive.url)

    _, html = fetch(directive.url)
    content = extract_page_content(directive.url, html)
    logger.info(
        "Analysed %s in %.2fs (title=%r, %d colours)",
        directive.url,
        time.perf_counter() - start,
        content.title,
        len(content.extracted_colors),
    )

    prompt = build_banner_prompt(content, directive.template)
    raw = generation_client.generate(prompt)
    svg_content = extract_svg(raw)

    result = assemble_result(content, directive.template, svg_content)
    logger.info(
        "Banner for %s ready in %.2fs (colors=%s)",
        directive.url,
        time.perf_counter() - start,
        result.colors,
    )
    return result
