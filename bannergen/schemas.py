"""Shared data structures used across modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidInputError

TEMPLATES = ("modern", "minimal", "gradient", "bold")


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


@dataclass(frozen=True, slots=True)
class GenerationDirective:
    url: str
    template: str

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationDirective":
        """Validate a decoded request body.

        Raises ``InvalidInputError`` with the exact message returned to the
        caller; nothing here touches the network.
        """

        if not isinstance(payload, dict):
            raise InvalidInputError("URL and template are required")
        try:
            request = BannerRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidInputError("URL and template are required") from exc
        url = (request.url or "").strip()
        template = (request.template or "").strip()
        if not url or not template:
            raise InvalidInputError("URL and template are required")
        if not is_valid_url(url):
            raise InvalidInputError("Invalid URL provided")
        if template not in TEMPLATES:
            raise InvalidInputError("Invalid template provided")
        return cls(url=url, template=template)


@dataclass(slots=True)
class WebDocumentContent:
    url: str
    title: str
    description: str
    keywords: List[str] = field(default_factory=list)
    main_content_snippet: str = ""
    extracted_colors: List[str] = field(default_factory=list)
    domain: str = ""


@dataclass(slots=True)
class BannerResult:
    title: str
    description: str
    colors: List[str]
    keywords: List[str]
    svg_content: str


class BannerRequest(BaseModel):
    """Incoming JSON body. Fields stay optional so missing values map to a 400."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    template: str | None = None


class BannerResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    colors: List[str]
    keywords: List[str]
    svg_content: str = Field(alias="svgContent")

    @classmethod
    def from_result(cls, result: BannerResult) -> "BannerResponse":
        return cls(
            title=result.title,
            description=result.description,
            colors=list(result.colors),
            keywords=list(result.keywords),
            svg_content=result.svg_content,
        )
