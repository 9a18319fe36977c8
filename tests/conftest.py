"""Shared test fixtures."""

from pathlib import Path

import pytest
from plainwiki.config import Config, ServerConfig, WikiConfig
from plainwiki.core.pages import PageStore


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates pages_dir and returns a Config instance without sessions.
    """
    pages_dir = tmp_path / "pages"
    pages_dir.mkdir(exist_ok=True)

    return Config(
        server=ServerConfig(),
        wiki=WikiConfig(
            title="Test Wiki",
            pages_dir=pages_dir,
            images_dir=tmp_path / "images",
        ),
        sessions=None,
    )


@pytest.fixture
def page_store(test_config: Config) -> PageStore:
    """Page store over the test pages directory."""
    return PageStore(test_config.wiki.pages_dir)
