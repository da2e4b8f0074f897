"""Shared test fixtures."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from iofs.config import Settings
from iofs.context import AppContext
from iofs.tui import TUI


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


# ============================================================================
# Filesystem Fixtures
# ============================================================================


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create a small text file."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"first line\r\nsecond\tline\nthird\n")
    return path


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a three-level directory tree.

    Layout::

        tree/
            a.txt          (6 bytes)
            .hidden        (1 byte)
            sub/
                b.bin      (3 bytes)
                deep/
                    c.md   (4 bytes)
    """
    root = tmp_path / "tree"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha\n")
    (root / ".hidden").write_bytes(b"h")
    (root / "sub" / "b.bin").write_bytes(b"\x00\x01\x02")
    (root / "sub" / "deep" / "c.md").write_bytes(b"# c\n")
    return root


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def output_console() -> Console:
    """Create a Rich console that records into a string buffer."""
    return Console(file=StringIO(), width=200, no_color=True, highlight=False)


@pytest.fixture
def app_context(tmp_path: Path, output_console: Console) -> AppContext:
    """Create an AppContext rooted at tmp_path with captured output."""
    return AppContext(
        settings=Settings(),
        cwd=str(tmp_path),
        tui=TUI(console=output_console),
    )

