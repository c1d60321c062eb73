"""mdpreview configuration system.

Configuration is YAML-based with per-run CLI overrides (--template, --skip-preview).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.mdpreview/config.yaml
3. ./mdpreview.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_TITLE = "Markdown Preview Tool"

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta http-equiv="content-type" content="text/html; charset=utf-8">
    <title>{{ title }}</title>
</head>
<body>
{{ body }}
</body>
</html>"""

VALID_PLACEMENTS = {"temp", "derived"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class OutputConfig:
    """Output placement configuration.

    Attributes:
        placement: "temp" for a fresh temporary file (removed after preview),
            "derived" for <input name>.html (kept)
        directory: Directory for the output file (system temp dir or cwd if None)
        prefix: Temp file name prefix
        suffix: Temp file name suffix
    """

    placement: str = "temp"
    directory: str | None = None
    prefix: str = "mdp"
    suffix: str = ".html"

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.placement not in VALID_PLACEMENTS:
            raise ValueError(
                f"Invalid output placement: {self.placement}. Valid: {sorted(VALID_PLACEMENTS)}"
            )


@dataclass
class TemplateConfig:
    """Template configuration.

    Attributes:
        path: Custom template file (the --template option takes precedence)
        title: Document title
        title_from_input: Use the input file stem as title instead
        skeleton: Built-in template source used when no path is set
    """

    path: str | None = None
    title: str = DEFAULT_TITLE
    title_from_input: bool = False
    skeleton: str = DEFAULT_TEMPLATE


@dataclass
class RendererConfig:
    """Markdown renderer configuration.

    Attributes:
        extensions: Python-Markdown extensions to enable
    """

    extensions: list[str] = field(default_factory=lambda: ["fenced_code", "tables", "sane_lists"])


@dataclass
class PreviewConfig:
    """Browser preview configuration.

    Attributes:
        enabled: Whether to open the result (--skip-preview disables per run)
        grace_period: Seconds to wait after launching the opener before a
            temporary file is removed
    """

    enabled: bool = True
    grace_period: float = 2.0

    def __post_init__(self) -> None:
        """Validate preview configuration."""
        if self.grace_period < 0:
            raise ValueError(f"Preview grace period must be >= 0 (got {self.grace_period})")


@dataclass
class MdPreviewConfig:
    """Top-level mdpreview configuration.

    Attributes:
        output: Output placement
        template: Template selection and title
        renderer: Markdown extensions
        preview: Browser preview settings
    """

    output: OutputConfig = field(default_factory=OutputConfig)
    template: TemplateConfig = field(default_factory=TemplateConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${HOME}/previews -> /home/user/previews

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.mdpreview/config.yaml
    2. ./mdpreview.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".mdpreview" / "config.yaml",
        start_path / "mdpreview.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> MdPreviewConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        MdPreviewConfig instance
    """
    # The skeleton is template source; ${...} inside it is left alone
    template_data = dict(data.get("template") or {})
    skeleton = template_data.pop("skeleton", None)

    data = substitute_env_vars({**data, "template": template_data})

    config = MdPreviewConfig()

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            placement=output_data.get("placement", config.output.placement),
            directory=output_data.get("directory", config.output.directory),
            prefix=output_data.get("prefix", config.output.prefix),
            suffix=output_data.get("suffix", config.output.suffix),
        )

    if "template" in data:
        template_section = data["template"] or {}
        config.template = TemplateConfig(
            path=template_section.get("path", config.template.path),
            title=str(template_section.get("title", config.template.title)),
            title_from_input=template_section.get(
                "title_from_input", config.template.title_from_input
            ),
            skeleton=skeleton if skeleton is not None else config.template.skeleton,
        )

    if "renderer" in data:
        renderer_data = data["renderer"] or {}
        config.renderer = RendererConfig(
            extensions=list(renderer_data.get("extensions", config.renderer.extensions)),
        )

    if "preview" in data:
        preview_data = data["preview"] or {}
        config.preview = PreviewConfig(
            enabled=preview_data.get("enabled", True),
            grace_period=float(preview_data.get("grace_period", 2.0)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> MdPreviewConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        MdPreviewConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = MdPreviewConfig()

    return config
