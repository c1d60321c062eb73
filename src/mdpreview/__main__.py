"""Entry point for running mdpreview as a module.

Usage:
    python -m mdpreview --file README.md [options]

Example:
    python -m mdpreview --file README.md --skip-preview
    python -m mdpreview -f notes.md -t custom.html.j2
"""

from mdpreview.cli import app

if __name__ == "__main__":
    app()
