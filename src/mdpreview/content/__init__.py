"""Content transforms: Markdown rendering and HTML sanitization.

Both transforms are pure byte-to-byte functions. Rendered HTML is never
safe to template until it passes the sanitizer.
"""

from mdpreview.content.renderer import MarkdownRenderer, render_markdown
from mdpreview.content.sanitizer import HTMLSanitizer, sanitize_html

__all__ = ["HTMLSanitizer", "MarkdownRenderer", "render_markdown", "sanitize_html"]
