"""Markdown to HTML rendering.

Output is raw HTML: inline and block HTML found in the source is passed
through untouched, so the result must go through the sanitizer before it
is templated.
"""

import logging

import markdown

from mdpreview.models import RenderedFragment

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables", "sane_lists")


def decode_source(source: bytes) -> str:
    """Decode Markdown bytes, replacing undecodable sequences.

    Args:
        source: Raw file content

    Returns:
        Text with a leading BOM removed
    """
    return source.decode("utf-8-sig", errors="replace")


class MarkdownRenderer:
    """Renders Markdown to HTML with Python-Markdown.

    A new ``markdown.Markdown`` instance is created for every call, so
    reference definitions or footnotes from one document never leak into
    the next.
    """

    def __init__(self, extensions: list[str] | tuple[str, ...] | None = None) -> None:
        """Initialize the renderer.

        Args:
            extensions: Python-Markdown extension names (default: fenced_code, tables, sane_lists)
        """
        self.extensions = list(extensions) if extensions is not None else list(DEFAULT_EXTENSIONS)

    def render(self, source: bytes) -> RenderedFragment:
        """Render Markdown bytes to HTML bytes.

        Malformed Markdown degrades to literal text; nothing is rejected.

        Args:
            source: Markdown source as bytes

        Returns:
            UTF-8 encoded HTML fragment
        """
        text = decode_source(source)
        converter = markdown.Markdown(extensions=self.extensions, output_format="html")
        html = converter.convert(text)
        logger.debug("Rendered %d bytes of Markdown to %d characters of HTML", len(source), len(html))
        return html.encode("utf-8")


def render_markdown(
    source: bytes,
    extensions: list[str] | tuple[str, ...] | None = None,
) -> RenderedFragment:
    """Render Markdown bytes to HTML bytes with the given extensions."""
    return MarkdownRenderer(extensions).render(source)
