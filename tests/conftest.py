"""Shared pytest fixtures for mdpreview tests.

Fixtures are organized by category:
- Path fixtures: sample Markdown, golden output and templates
- Configuration fixtures: configs that keep all output under tmp_path
- Launcher fixtures: FakeLauncher records opened files instead of launching
"""

from pathlib import Path
from typing import Any

import pytest

from mdpreview.config import MdPreviewConfig, OutputConfig, load_config_from_dict
from tests.fixtures import (
    CUSTOM_TEMPLATE,
    FIXTURES_DIR,
    SAMPLE_GOLDEN,
    SAMPLE_MARKDOWN,
    UNSAFE_MARKDOWN,
    FakeLauncher,
)

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sample_markdown() -> Path:
    """Return the sample Markdown file (heading, paragraph, link)."""
    return SAMPLE_MARKDOWN


@pytest.fixture
def golden_html() -> bytes:
    """Return the expected document for the sample Markdown file."""
    return SAMPLE_GOLDEN.read_bytes()


@pytest.fixture
def unsafe_markdown() -> Path:
    """Return Markdown that embeds unsafe HTML."""
    return UNSAFE_MARKDOWN


@pytest.fixture
def custom_template() -> Path:
    """Return the alternate template fixture."""
    return CUSTOM_TEMPLATE


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Create a directory that receives generated HTML files."""
    directory = tmp_path / "out"
    directory.mkdir()
    return directory


@pytest.fixture
def temp_config(output_dir: Path) -> MdPreviewConfig:
    """Config writing temporary files into output_dir."""
    config = MdPreviewConfig()
    config.output = OutputConfig(placement="temp", directory=str(output_dir))
    return config


@pytest.fixture
def derived_config(output_dir: Path) -> MdPreviewConfig:
    """Config writing <input>.html files into output_dir."""
    config = MdPreviewConfig()
    config.output = OutputConfig(placement="derived", directory=str(output_dir))
    return config


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete mdpreview configuration with all options."""
    return {
        "output": {
            "placement": "derived",
            "directory": "previews",
            "prefix": "doc",
            "suffix": ".htm",
        },
        "template": {
            "path": "templates/page.html.j2",
            "title": "Team Notes",
            "title_from_input": True,
        },
        "renderer": {
            "extensions": ["fenced_code", "tables", "sane_lists"],
        },
        "preview": {
            "enabled": False,
            "grace_period": 0.5,
        },
    }


@pytest.fixture
def loaded_full_config(full_config: dict[str, Any]) -> MdPreviewConfig:
    """Return full_config parsed into an MdPreviewConfig."""
    return load_config_from_dict(full_config)


# =============================================================================
# Launcher Fixtures
# =============================================================================


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    """Return a launcher double that succeeds."""
    return FakeLauncher()
