"""Error types for the preview pipeline.

Every error is terminal for the current invocation. The CLI reports
``str(error)`` on stderr and exits with status 1.
"""

from pathlib import Path


class PreviewToolError(Exception):
    """Base class for all mdpreview errors."""


class InputReadError(PreviewToolError):
    """Raised when the Markdown source cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read input file {self.path}: {reason}")


class TemplateLoadError(PreviewToolError):
    """Raised when a custom template is unreadable or malformed."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        source = str(self.path) if self.path is not None else "<default>"
        super().__init__(f"Cannot load template {source}: {reason}")


class TemplateExecutionError(PreviewToolError):
    """Raised when substituting the document view into a template fails."""

    def __init__(self, reason: str, template_name: str | None = None) -> None:
        self.reason = reason
        self.template_name = template_name
        prefix = f"Template execution failed ({template_name})" if template_name else "Template execution failed"
        super().__init__(f"{prefix}: {reason}")


class OutputWriteError(PreviewToolError):
    """Raised when the output file cannot be created or written."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        target = str(self.path) if self.path is not None else "temporary file"
        super().__init__(f"Cannot write output {target}: {reason}")


class UnsupportedPlatformError(PreviewToolError):
    """Raised when preview is requested on a platform with no known opener."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"OS not supported for preview: {platform}")


class PreviewLaunchError(PreviewToolError):
    """Raised when the opener is missing or exits with a failure."""

    def __init__(
        self,
        command: str,
        message: str,
        exit_code: int | None = None,
    ) -> None:
        self.command = command
        self.exit_code = exit_code
        full_message = f"Preview failed: {command} - {message}"
        if exit_code is not None:
            full_message += f" (exit code: {exit_code})"
        super().__init__(full_message)
