"""Preview pipeline orchestrator.

Drives one invocation from Markdown file to HTML artifact:
read -> render -> sanitize -> template -> write -> report -> (preview).

The order of render, sanitize and template is fixed: the templater only
ever receives sanitizer output.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from mdpreview.config import MdPreviewConfig
from mdpreview.content.renderer import MarkdownRenderer
from mdpreview.content.sanitizer import HTMLSanitizer
from mdpreview.errors import InputReadError, OutputWriteError, PreviewToolError
from mdpreview.models import (
    DocumentView,
    PreviewResult,
    RenderedDocument,
    SourceDocument,
    Stage,
)
from mdpreview.templates.templater import Templater
from mdpreview.utils.launcher import Launcher

logger = logging.getLogger(__name__)

OUTPUT_MODE = 0o644


@dataclass
class PipelineOptions:
    """Per-run options, usually set from the CLI.

    Attributes:
        skip_preview: Do not open the result; the file is kept
        template_path: Custom template (overrides the config file)
    """

    skip_preview: bool = False
    template_path: Path | None = None


class PreviewPipeline:
    """Runs the Markdown preview pipeline for a single input file.

    Usage:
        pipeline = PreviewPipeline(config)
        result = pipeline.run(Path("README.md"), sys.stdout, PipelineOptions())
    """

    def __init__(
        self,
        config: MdPreviewConfig | None = None,
        launcher: Launcher | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            config: mdpreview configuration (uses defaults if None)
            launcher: Preview launcher (platform default if None)
        """
        self.config = config or MdPreviewConfig()
        self.launcher = launcher or Launcher(grace_period=self.config.preview.grace_period)
        self._renderer = MarkdownRenderer(self.config.renderer.extensions)
        self._sanitizer = HTMLSanitizer()

    # =========================================================================
    # Pipeline steps
    # =========================================================================

    def read_source(self, input_path: Path) -> SourceDocument:
        """Read the whole input file.

        Raises:
            InputReadError: If the file is missing or unreadable
        """
        try:
            content = input_path.read_bytes()
        except OSError as e:
            raise InputReadError(input_path, e.strerror or str(e)) from e

        logger.debug("Read %d bytes from %s", len(content), input_path)
        return SourceDocument(path=input_path, content=content)

    def load_templater(self, template_path: Path | None = None) -> Templater:
        """Compile the custom template if one is set, else the default skeleton.

        Raises:
            TemplateLoadError: If the template cannot be loaded
        """
        path = template_path
        if path is None and self.config.template.path:
            path = Path(self.config.template.path)

        if path is not None:
            return Templater.from_file(path)
        return Templater.from_string(self.config.template.skeleton)

    def resolve_title(self, input_path: Path | None = None) -> str:
        """Return the document title for an input file."""
        if self.config.template.title_from_input and input_path is not None:
            return input_path.stem
        return self.config.template.title

    def parse_content(
        self,
        source: bytes,
        template_path: Path | None = None,
        title: str | None = None,
    ) -> bytes:
        """Convert Markdown bytes into a complete HTML document.

        Args:
            source: Markdown source
            template_path: Custom template file
            title: Document title (configured title if None)

        Returns:
            Rendered HTML document bytes
        """
        return self._build_document(source, template_path, title).content

    def _build_document(
        self,
        source: bytes,
        template_path: Path | None,
        title: str | None,
        stages: list[Stage] | None = None,
    ) -> RenderedDocument:
        def enter(stage: Stage) -> None:
            if stages is not None:
                stages.append(stage)
            logger.debug("Stage: %s", stage.value)

        enter(Stage.RENDERING)
        rendered = self._renderer.render(source)

        enter(Stage.SANITIZING)
        safe = self._sanitizer.sanitize(rendered)

        enter(Stage.TEMPLATING)
        templater = self.load_templater(template_path)
        view = DocumentView.from_safe_fragment(title or self.config.template.title, safe)
        return templater.render(view)

    def output_path_for(self, input_path: Path) -> Path:
        """Derived output path: <input base name>.html."""
        directory = Path(self.config.output.directory) if self.config.output.directory else Path.cwd()
        return directory / f"{input_path.name}.html"

    def write_output(self, input_path: Path, document: RenderedDocument) -> Path:
        """Persist the document according to the placement policy.

        Args:
            input_path: Markdown input (names derived outputs)
            document: Rendered document

        Returns:
            Path of the written file

        Raises:
            OutputWriteError: If the file cannot be created or written
        """
        output = self.config.output

        if output.placement == "derived":
            target = self.output_path_for(input_path)
            try:
                target.write_bytes(document.content)
                os.chmod(target, OUTPUT_MODE)
            except OSError as e:
                raise OutputWriteError(target, e.strerror or str(e)) from e
            return target

        try:
            fd, name = tempfile.mkstemp(
                prefix=output.prefix,
                suffix=output.suffix,
                dir=output.directory,
            )
        except OSError as e:
            raise OutputWriteError(None, e.strerror or str(e)) from e

        target = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(document.content)
            os.chmod(target, OUTPUT_MODE)
        except OSError as e:
            target.unlink(missing_ok=True)
            raise OutputWriteError(target, e.strerror or str(e)) from e

        return target

    # =========================================================================
    # Full run
    # =========================================================================

    def run(
        self,
        input_path: Path,
        out: TextIO,
        options: PipelineOptions | None = None,
    ) -> PreviewResult:
        """Execute the full pipeline.

        The output path is written to ``out`` as a single line once the
        file is complete. Temporary files are removed after a preview;
        skipping the preview keeps them.

        Args:
            input_path: Markdown file
            out: Channel that receives the output path
            options: Per-run options

        Returns:
            PreviewResult describing the run

        Raises:
            PreviewToolError: On any failure; the run stops at that step
        """
        if options is None:
            options = PipelineOptions()

        stages: list[Stage] = [Stage.READING]
        try:
            source = self.read_source(input_path)

            document = self._build_document(
                source.content,
                options.template_path,
                self.resolve_title(input_path),
                stages,
            )

            stages.append(Stage.WRITING)
            output_path = self.write_output(input_path, document)
        except PreviewToolError:
            logger.debug("Stage: %s (during %s)", Stage.FAILED.value, stages[-1].value)
            raise

        temporary = self.config.output.placement == "temp"
        logger.info(
            "Wrote %s (%d bytes)",
            output_path,
            len(document),
            extra={"extra_data": {"path": str(output_path), "bytes": len(document)}},
        )

        out.write(f"{output_path}\n")
        out.flush()

        result = PreviewResult(output_path=output_path, temporary=temporary)

        if options.skip_preview or not self.config.preview.enabled:
            logger.debug("Preview skipped; keeping %s", output_path)
            result.stage = Stage.DONE
            return result

        result.stage = Stage.PREVIEW_PENDING
        try:
            self.launcher.open(output_path)
            result.previewed = True
            result.stage = Stage.PREVIEWED
        finally:
            if temporary:
                output_path.unlink(missing_ok=True)
                result.removed = True
                logger.debug("Removed temporary file %s", output_path)

        result.stage = Stage.CLEANED_UP if temporary else Stage.DONE
        return result
