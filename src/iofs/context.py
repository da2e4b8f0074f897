"""Application context for dependency injection.

CLI commands take their settings, working directory and reporter from an
AppContext instead of reading process state directly, so tests can build
one with a temporary directory and a captured console.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from iofs.config import Settings, load_settings
from iofs.tui import TUI


@dataclass
class AppContext:
    """Container for CLI dependencies.

    Attributes:
        settings: Loaded user settings.
        cwd: Directory relative paths resolve against; None means the
            process working directory.
        tui: Reporter used for all output.
    """

    settings: Settings = field(default_factory=Settings)
    cwd: str | None = None
    tui: TUI = field(default_factory=TUI)


def create_context(config_path: Path | None = None, cwd: str | None = None) -> AppContext:
    """Factory for the production context.

    Args:
        config_path: Override settings file (for testing).
        cwd: Override working directory.

    Returns:
        Configured AppContext.
    """
    settings = load_settings(config_path)
    return AppContext(settings=settings, cwd=cwd, tui=TUI(color=settings.color))
