"""mdpreview - Markdown preview tool.

Converts a Markdown file into a sanitized, templated HTML document and
optionally opens it in the system's default browser.

Pipeline (one-shot, no state between runs):
- Render: Markdown -> HTML (Python-Markdown)
- Sanitize: strip scripts, event handlers and unsafe URLs (bleach)
- Template: wrap the safe fragment in an HTML document (Jinja2)
- Write: persist to a temporary or derived file and report its path
- Preview: open with the platform opener, then clean up temp files
"""

__version__ = "0.1.0"
__author__ = "mdpreview Contributors"
