"""Exception hierarchy for the banner pipeline and its HTTP boundary."""
from __future__ import annotations


class BannerError(RuntimeError):
    """Base class for every failure the service reports to callers."""

    public_message = "Internal server error"
    status_code = 500


class InvalidInputError(BannerError):
    """Missing or malformed request fields."""

    status_code = 400

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class ConfigurationError(BannerError):
    """Required configuration (e.g. the OpenAI credential) is missing."""

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return str(self)


class PageAnalysisError(BannerError):
    public_message = "Failed to analyze webpage content"


class FetchError(PageAnalysisError):
    """The page could not be retrieved."""


class FetchTimeoutError(FetchError):
    pass


class UpstreamStatusError(FetchError):
    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"HTTP error fetching {url}: status {status}")
        self.url = url
        self.status = status


class ExtractionError(PageAnalysisError):
    def __init__(self, url: str, reason: str = "") -> None:
        message = f"Failed to extract content from {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url


class BannerGenerationError(BannerError):
    public_message = "Failed to generate banner with AI"


class GenerationServiceError(BannerGenerationError):
    """The text generation service call failed (network, auth, quota)."""


class ArtifactFormatError(BannerGenerationError):
    """The generated text did not contain an SVG fragment."""
