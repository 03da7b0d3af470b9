"""Prompt construction for banner generation."""
from __future__ import annotations

from .errors import InvalidInputError
from .schemas import WebDocumentContent

CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 630
CANVAS_MARGIN = 60
MAX_DOMINANT_COLORS = 2

TEMPLATE_DESCRIPTIONS = {
    "modern": (
        "Clean, professional design with subtle geometric elements, plenty of white space, "
        "and a sophisticated color palette"
    ),
    "minimal": (
        "Ultra-clean design with minimal elements, centered text, simple typography, "
        "and lots of white space"
    ),
    "gradient": "Dynamic design with vibrant gradients, bold colors, and modern visual effects",
    "bold": "Strong, impactful design with bold colors, large typography, and geometric shapes",
}


def build_banner_prompt(content: WebDocumentContent, template: str) -> str:
    """Render extracted page metadata and a template style into one instruction.

    The output depends only on the arguments, so identical inputs always give
    identical prompts.
    """

    try:
        style = TEMPLATE_DESCRIPTIONS[template]
    except KeyError as exc:
        raise InvalidInputError("Invalid template provided") from exc

    source = content.domain or content.url
    lines = [
        f"Create a promotional social media banner in SVG format for the website {source}.",
        "",
        "Website details:",
        f"- Domain: {content.domain or 'unknown'}",
        f"- Title: {content.title}",
        f"- Description: {content.description}",
        f"- Keywords: {', '.join(content.keywords) if content.keywords else 'none'}",
    ]
    if content.extracted_colors:
        lines.append(
            f"- Brand colors found on {source}: {', '.join(content.extracted_colors)} "
            f"(pick at most {MAX_DOMINANT_COLORS} of these)"
        )
    lines += [
        "",
        f"Template style: {template} - {style}",
        "",
        "Requirements:",
        f'1. Return one complete, valid SVG root element with width="{CANVAS_WIDTH}" '
        f'height="{CANVAS_HEIGHT}" and viewBox="0 0 {CANVAS_WIDTH} {CANVAS_HEIGHT}".',
        f"2. Use no more than {MAX_DOMINANT_COLORS} dominant colors, plus black or white for text.",
        f"3. Keep all text and key elements at least {CANVAS_MARGIN} units away from every canvas edge.",
        f"4. Write a short headline and tagline that promote {source}; paraphrase the title "
        "and description instead of copying them verbatim.",
        f"5. Follow the {template} template style and keep text readable against its background.",
        "6. Use web-safe fonts such as Arial, Helvetica, sans-serif.",
        "",
        "Return ONLY the SVG markup, with no explanations, commentary, or code fences.",
    ]
    return "\n".join(lines)
