"""Test fixtures for mdpreview.

Files:
- sample.md: heading, paragraph and link
- sample.md.html: expected document for sample.md with the default template
- unsafe.md: Markdown embedding scripts, event handlers and javascript: URLs
- custom.html.j2: alternate template with title and body fields
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

SAMPLE_MARKDOWN = FIXTURES_DIR / "sample.md"
SAMPLE_GOLDEN = FIXTURES_DIR / "sample.md.html"
UNSAFE_MARKDOWN = FIXTURES_DIR / "unsafe.md"
CUSTOM_TEMPLATE = FIXTURES_DIR / "custom.html.j2"


class FakeLauncher:
    """Launcher double that records opened paths and whether they existed."""

    def __init__(self, error: Exception | None = None) -> None:
        self.opened: list[Path] = []
        self.existed: list[bool] = []
        self.error = error

    def open(self, target: Path) -> None:
        self.opened.append(target)
        self.existed.append(target.exists())
        if self.error is not None:
            raise self.error
