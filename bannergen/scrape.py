"""Landing page fetching and metadata extraction."""
from __future__ import annotations

import logging
import time
from typing import Iterable, List
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup, NavigableString, Tag

from . import config
from .colors import extract_colors
from .errors import ExtractionError, FetchError, FetchTimeoutError, UpstreamStatusError
from .schemas import WebDocumentContent

logger = logging.getLogger(__name__)

# Plenty of marketing sites serve an interstitial or a 403 to obvious bots.
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

TITLE_LIMIT = 100
DESCRIPTION_LIMIT = 200
SNIPPET_LIMIT = 500
KEYWORD_LIMIT = 10

UNTITLED_PAGE = "Untitled Page"
NO_DESCRIPTION = "No description available"

CONTENT_SELECTORS = ("main", "article", "[role='main']", ".content", "#content")
NON_VISIBLE_TAGS = frozenset({"head", "title", "script", "style", "noscript", "template"})
CHUNK_SIZE = 64 * 1024


def fetch_page(url: str, timeout: float | None = None) -> tuple[str, str]:
    """Fetch a page once and return ``(final_url, html)``.

    ``timeout`` bounds the whole download, not just each socket read: the
    body is streamed and abandoned once the deadline passes. There is no
    retry; a timeout, transport failure, or non-2xx status is raised straight
    to the caller.
    """

    wait = config.fetch_timeout() if timeout is None else timeout
    start = time.perf_counter()
    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=wait,
            allow_redirects=True,
            stream=True,
        )
        with response:
            if not 200 <= response.status_code < 300:
                logger.info("Upstream %s answered with status %s", url, response.status_code)
                raise UpstreamStatusError(url, response.status_code)

            chunks: List[bytes] = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.perf_counter() - start > wait:
                    logger.warning("Download of %s exceeded %.1fs", url, wait)
                    raise FetchTimeoutError(f"Timed out after {wait:g}s fetching {url}")
                chunks.append(chunk)
            final_url = str(response.url)
            html = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
    except requests.Timeout as exc:
        logger.warning("Timed out after %.1fs fetching %s", wait, url)
        raise FetchTimeoutError(f"Timed out after {wait:g}s fetching {url}") from exc
    except requests.RequestException as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    except LookupError as exc:
        # Unknown charset name in the Content-Type header.
        raise FetchError(f"Failed to decode {url}: {exc}") from exc

    logger.info(
        "Fetched %s (%d chars) in %.2fs",
        final_url,
        len(html),
        time.perf_counter() - start,
    )
    return final_url, html


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def domain_from_url(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def _first_non_empty(candidates: Iterable[str | None]) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return ""


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = tag.get("content")
    return content if isinstance(content, str) else None


def _first_text(soup: BeautifulSoup, name: str) -> str | None:
    tag = soup.find(name)
    return tag.get_text(" ", strip=True) if tag else None


def visible_text(root: Tag) -> str:
    """Return whitespace-normalised text without script or style contents."""

    chunks: List[str] = []
    for node in root.find_all(string=True):
        if type(node) is not NavigableString:
            # Comments, doctypes and script/style payloads are subclasses.
            continue
        if any(parent.name in NON_VISIBLE_TAGS for parent in node.parents):
            continue
        text = node.strip()
        if text:
            chunks.append(text)
    return " ".join(chunks)


def _main_content(soup: BeautifulSoup) -> str:
    for selector in CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = visible_text(element)
        if text:
            return text
    body = soup.body or soup
    return visible_text(body)


def _keywords(soup: BeautifulSoup) -> List[str]:
    raw = _meta_content(soup, name="keywords") or ""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",")][:KEYWORD_LIMIT]


def _style_text(soup: BeautifulSoup) -> str:
    return "\n".join(
        str(child)
        for tag in soup.find_all("style")
        for child in tag.contents
        if isinstance(child, NavigableString)
    )


def extract_page_content(url: str, html: str, color_cap: int | None = None) -> WebDocumentContent:
    """Parse HTML and resolve the metadata fallback chains for ``url``.

    Any failure while parsing is re-raised as ``ExtractionError`` so the
    caller can tell extraction problems apart from fetch problems.
    """

    try:
        soup = parse_document(html)

        title = _first_non_empty(
            (
                _first_text(soup, "title"),
                _meta_content(soup, property="og:title"),
                _first_text(soup, "h1"),
            )
        ) or UNTITLED_PAGE

        first_paragraph = _first_text(soup, "p")
        description = _first_non_empty(
            (
                _meta_content(soup, name="description"),
                _meta_content(soup, property="og:description"),
                first_paragraph[:DESCRIPTION_LIMIT] if first_paragraph else None,
            )
        ) or NO_DESCRIPTION

        content = WebDocumentContent(
            url=url,
            title=title[:TITLE_LIMIT],
            description=description[:DESCRIPTION_LIMIT],
            keywords=_keywords(soup),
            main_content_snippet=_main_content(soup)[:SNIPPET_LIMIT],
            extracted_colors=extract_colors(_style_text(soup), cap=color_cap),
            domain=domain_from_url(url),
        )
    except Exception as exc:
        logger.error("Failed to extract content from %s: %s", url, exc)
        raise ExtractionError(url, str(exc)) from exc

    logger.debug(
        "Extracted %s: title=%r keywords=%d colors=%s",
        url,
        content.title,
        len(content.keywords),
        content.extracted_colors,
    )
    return content
