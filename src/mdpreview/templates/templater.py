"""HTML document templating.

Wraps a sanitized fragment in a complete HTML document using Jinja2.
Autoescaping is always on: the title is escaped, while the body is a
``Markup`` value and is inserted verbatim. Output is deterministic, so the
same view and template always produce identical bytes.
"""

import logging
from pathlib import Path

from jinja2 import (
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateSyntaxError,
    meta,
)

from mdpreview.config import DEFAULT_TEMPLATE
from mdpreview.errors import TemplateExecutionError, TemplateLoadError
from mdpreview.models import DocumentView, RenderedDocument

logger = logging.getLogger(__name__)

# Every template must substitute these DocumentView fields
REQUIRED_FIELDS = frozenset({"title", "body"})


def create_environment() -> Environment:
    """Create the Jinja2 environment shared by default and custom templates."""
    return Environment(
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def _referenced_fields(env: Environment, source: str) -> set[str]:
    return meta.find_undeclared_variables(env.parse(source))


class Templater:
    """Renders a DocumentView into a complete HTML document.

    Usage:
        templater = Templater.from_string(config.template.skeleton)
        document = templater.render(DocumentView.from_safe_fragment(title, safe))

        custom = Templater.from_file(Path("custom.html.j2"))
    """

    def __init__(
        self,
        template: Template,
        name: str = "default",
        fields: frozenset[str] = REQUIRED_FIELDS,
    ) -> None:
        """Initialize with a compiled template.

        Args:
            template: Compiled Jinja2 template
            name: Template name used in log and error messages
            fields: Variable names the template references
        """
        self._template = template
        self.name = name
        self.fields = fields

    @classmethod
    def from_string(
        cls,
        source: str = DEFAULT_TEMPLATE,
        name: str = "default",
        path: Path | None = None,
    ) -> "Templater":
        """Compile a template from source text.

        Args:
            source: Template source
            name: Template name for messages
            path: File the source came from, if any

        Returns:
            Templater for the compiled template

        Raises:
            TemplateLoadError: On syntax errors or missing title/body fields
        """
        env = create_environment()
        try:
            fields = _referenced_fields(env, source)
            template = env.from_string(source)
        except TemplateSyntaxError as e:
            raise TemplateLoadError(path, f"syntax error at line {e.lineno}: {e.message}") from e

        missing = REQUIRED_FIELDS - fields
        if missing:
            raise TemplateLoadError(
                path,
                f"template must reference {', '.join(sorted(missing))}",
            )

        logger.debug("Compiled template %s", name)
        return cls(template, name=name, fields=frozenset(fields))

    @classmethod
    def from_file(cls, path: Path) -> "Templater":
        """Load and compile a custom template file.

        Args:
            path: Template file path

        Returns:
            Templater for the compiled template

        Raises:
            TemplateLoadError: If the file cannot be read or compiled
        """
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(path, str(e)) from e

        logger.debug("Loaded template from %s", path)
        return cls.from_string(source, name=path.name, path=path)

    def render(self, view: DocumentView) -> RenderedDocument:
        """Substitute a document view into the template.

        Args:
            view: Title and sanitized body

        Returns:
            Rendered document bytes

        Raises:
            TemplateExecutionError: If substitution fails
        """
        try:
            rendered = self._template.render(**view.to_dict())
        except TemplateError as e:
            raise TemplateExecutionError(str(e), template_name=self.name) from e
        except Exception as e:
            # Expressions run arbitrary Python; include/extends fail without a loader
            raise TemplateExecutionError(
                f"{type(e).__name__}: {e}", template_name=self.name
            ) from e

        logger.debug("Rendered document (%d characters) with template %s", len(rendered), self.name)
        return RenderedDocument(content=rendered.encode("utf-8"), title=view.title)


def validate_template(path: Path) -> list[str]:
    """Check that a template file compiles and substitutes title and body.

    Args:
        path: Template file path

    Returns:
        Sorted names of the variables the template references

    Raises:
        TemplateLoadError: If the template is unreadable or invalid
    """
    return sorted(Templater.from_file(path).fields)
