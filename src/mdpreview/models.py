"""Data model for one preview run.

Fragments are plain ``bytes``; the dataclasses below carry the values that
cross component boundaries.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from markupsafe import Markup

# HTML produced by the Markdown renderer (may contain unsafe markup)
RenderedFragment = bytes

# HTML that passed the sanitizer
SafeFragment = bytes


class Stage(Enum):
    """Pipeline state for a single invocation."""

    IDLE = "idle"
    READING = "reading"
    RENDERING = "rendering"
    SANITIZING = "sanitizing"
    TEMPLATING = "templating"
    WRITING = "writing"
    PREVIEW_PENDING = "preview_pending"
    PREVIEWED = "previewed"
    CLEANED_UP = "cleaned_up"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceDocument:
    """Raw Markdown read from the input path.

    Attributes:
        path: Input file path
        content: File content as read from disk
    """

    path: Path
    content: bytes


@dataclass(frozen=True)
class DocumentView:
    """Substitution context for a template.

    Templates reference the fields as ``{{ title }}`` and ``{{ body }}``.

    Attributes:
        title: Document title (escaped on substitution)
        body: Sanitized HTML fragment (inserted verbatim)
    """

    title: str
    body: Markup

    @classmethod
    def from_safe_fragment(cls, title: str, fragment: SafeFragment) -> "DocumentView":
        """Build a view from sanitizer output."""
        return cls(title=title, body=Markup(fragment.decode("utf-8")))

    def to_dict(self) -> dict[str, str]:
        """Convert to template context."""
        return {"title": self.title, "body": self.body}


@dataclass(frozen=True)
class RenderedDocument:
    """Complete HTML document ready to be written."""

    content: bytes
    title: str

    def __len__(self) -> int:
        return len(self.content)


@dataclass
class PreviewResult:
    """Outcome of one pipeline run.

    Attributes:
        output_path: Where the document was written
        temporary: True if the file is a temp file (removable after preview)
        previewed: Whether the opener was launched successfully
        removed: Whether the file was deleted after preview
        stage: Final pipeline stage
    """

    output_path: Path
    temporary: bool
    previewed: bool = False
    removed: bool = False
    stage: Stage = Stage.DONE
