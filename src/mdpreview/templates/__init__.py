"""mdpreview document templating.

This module provides Jinja2-based HTML document rendering with deterministic output.
"""

from mdpreview.templates.templater import Templater, validate_template

__all__ = ["Templater", "validate_template"]
