"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    raise_exceptions = logging.raiseExceptions
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.raiseExceptions = raise_exceptions


@pytest.fixture
def crate_dir(tmp_path: Path) -> Path:
    """A crate directory with a Cargo.toml and an empty src/."""
    (tmp_path / "Cargo.toml").write_text('[package]\nname = "demo"\nversion = "0.1.0"\n')
    (tmp_path / "src").mkdir()
    return tmp_path.resolve()


@pytest.fixture
def src_dir(crate_dir: Path, monkeypatch) -> Path:
    """The crate's src/ directory, with no root files, as the cwd."""
    src = crate_dir / "src"
    monkeypatch.chdir(src)
    return src


@pytest.fixture
def lib_src(src_dir: Path) -> Path:
    """src/ holding a small lib.rs."""
    (src_dir / "lib.rs").write_text("//! Demo crate.\n\npub mod existing;\n\npub fn hello() {}\n")
    return src_dir
