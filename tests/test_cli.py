"""Tests for CLI commands using context injection.

Commands accept a _context parameter, so tests call them directly with an
AppContext rooted in a temporary directory and read the captured console.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from iofs import __version__, cli
from iofs.config import CONFIG_ENV, Settings
from iofs.context import AppContext


def output(context: AppContext) -> str:
    return context.tui.console.file.getvalue()


class TestVersion:
    """Tests for the version option."""

    def test_version_callback(self) -> None:
        with pytest.raises(typer.Exit):
            cli.version_callback(True)

    def test_version_callback_noop(self) -> None:
        cli.version_callback(False)

    def test_version_option(self) -> None:
        result = CliRunner().invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert f"iofs v{__version__}" in result.output


class TestNormalize:
    """Tests for normalize command."""

    def test_relative(self, app_context: AppContext, tmp_path: Path) -> None:
        cli.normalize("a\\b//c/", _context=app_context)
        assert output(app_context).strip() == f"{tmp_path}/a/b/c"

    def test_absolute(self, app_context: AppContext) -> None:
        cli.normalize("/x//y", _context=app_context)
        assert output(app_context).strip() == "/x/y"


class TestInfo:
    """Tests for info command."""

    def test_info_table(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.info(str(sample_tree / "a.txt"), as_json=False, _context=app_context)
        text = output(app_context)
        assert "a.txt" in text
        assert "text/plain" in text

    def test_info_json(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.info("tree/sub", as_json=True, _context=app_context)
        data = json.loads(output(app_context))
        assert data["name"] == "sub"
        assert data["kind"] == "directory"
        assert data["size_bytes"] == 7

    def test_info_missing(self, app_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.info("nothing-here", as_json=False, _context=app_context)
        assert exc_info.value.exit_code == 1
        assert "Cannot open" in output(app_context)


class TestLs:
    """Tests for ls command."""

    def test_hides_dotfiles(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.ls("tree", show_all=False, _context=app_context)
        text = output(app_context)
        assert "a.txt" in text
        assert "sub/" in text
        assert ".hidden" not in text

    def test_all(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.ls("tree", show_all=True, _context=app_context)
        assert ".hidden" in output(app_context)

    def test_show_hidden_setting(self, app_context: AppContext, sample_tree: Path) -> None:
        app_context.settings = Settings(show_hidden=True)
        cli.ls("tree", show_all=False, _context=app_context)
        assert ".hidden" in output(app_context)

    def test_missing_directory(self, app_context: AppContext) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.ls("missing", show_all=False, _context=app_context)
        assert exc_info.value.exit_code == 1


class TestCopyMove:
    """Tests for cp and mv commands."""

    def test_cp_file(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        cli.cp("tree/a.txt", "copy.txt", force=False, _context=app_context)
        assert (tmp_path / "copy.txt").read_bytes() == b"alpha\n"
        assert "Copied" in output(app_context)

    def test_cp_tree(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        cli.cp("tree", "tree2", force=False, _context=app_context)
        assert (tmp_path / "tree2" / "sub" / "deep" / "c.md").exists()

    def test_cp_existing(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        (tmp_path / "copy.txt").write_bytes(b"keep")
        with pytest.raises(typer.Exit) as exc_info:
            cli.cp("tree/a.txt", "copy.txt", force=False, _context=app_context)
        assert exc_info.value.exit_code == 1
        assert "--force" in output(app_context)
        assert (tmp_path / "copy.txt").read_bytes() == b"keep"

    def test_cp_force(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        (tmp_path / "copy.txt").write_bytes(b"stale")
        cli.cp("tree/a.txt", "copy.txt", force=True, _context=app_context)
        assert (tmp_path / "copy.txt").read_bytes() == b"alpha\n"

    def test_cp_into_itself(self, app_context: AppContext, sample_tree: Path) -> None:
        with pytest.raises(typer.Exit):
            cli.cp("tree", "tree/sub/again", force=False, _context=app_context)
        assert "into itself" in output(app_context)

    def test_cp_force_over_own_parent(
        self, app_context: AppContext, sample_tree: Path
    ) -> None:
        """Test --force never deletes a destination that lies inside the source."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.cp("tree", "tree/sub", force=True, _context=app_context)
        assert exc_info.value.exit_code == 1
        assert "into itself" in output(app_context)
        assert (sample_tree / "sub" / "b.bin").exists()

    def test_mv_force_over_ancestor(self, app_context: AppContext, sample_tree: Path) -> None:
        with pytest.raises(typer.Exit):
            cli.mv("tree/sub", "tree", force=True, _context=app_context)
        assert "contains" in output(app_context)
        assert (sample_tree / "a.txt").exists()

    def test_mv(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        cli.mv("tree/sub", "moved", force=False, _context=app_context)
        assert not (sample_tree / "sub").exists()
        assert (tmp_path / "moved" / "b.bin").exists()
        assert "Moved" in output(app_context)

    def test_mv_missing_source(self, app_context: AppContext) -> None:
        with pytest.raises(typer.Exit):
            cli.mv("ghost", "anywhere", force=False, _context=app_context)


class TestRm:
    """Tests for rm command."""

    def test_rm_file(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.rm("tree/a.txt", _context=app_context)
        assert not (sample_tree / "a.txt").exists()

    def test_rm_tree(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.rm("tree", _context=app_context)
        assert not sample_tree.exists()
        assert "Deleted" in output(app_context)


class TestEq:
    """Tests for eq command."""

    def test_identical_files(self, app_context: AppContext, tmp_path: Path) -> None:
        (tmp_path / "a").write_bytes(b"same")
        (tmp_path / "b").write_bytes(b"same")
        cli.eq("a", "b", _context=app_context)
        assert "identical" in output(app_context)

    def test_different_files(self, app_context: AppContext, tmp_path: Path) -> None:
        (tmp_path / "a").write_bytes(b"same")
        (tmp_path / "b").write_bytes(b"diff")
        app_context.settings = Settings(compare_chunk_size=1)
        with pytest.raises(typer.Exit) as exc_info:
            cli.eq("a", "b", _context=app_context)
        assert exc_info.value.exit_code == 1
        assert "differ" in output(app_context)

    def test_trees(self, app_context: AppContext, sample_tree: Path, tmp_path: Path) -> None:
        cli.cp("tree", "copy", force=False, _context=app_context)
        cli.eq("tree", "copy", _context=app_context)
        (tmp_path / "copy" / "sub" / "deep" / "c.md").write_bytes(b"changed")
        with pytest.raises(typer.Exit):
            cli.eq("tree", "copy", _context=app_context)

    def test_file_against_directory(self, app_context: AppContext, sample_tree: Path) -> None:
        with pytest.raises(typer.Exit):
            cli.eq("tree", "tree/a.txt", _context=app_context)


class TestSize:
    """Tests for size command."""

    def test_directory_size(self, app_context: AppContext, sample_tree: Path) -> None:
        cli.size("tree", _context=app_context)
        assert output(app_context).strip().endswith(": 14")

    def test_missing(self, app_context: AppContext) -> None:
        with pytest.raises(typer.Exit):
            cli.size("missing", _context=app_context)


class TestNumber:
    """Tests for number command."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("0x1F", "hexadecimal: 31"), ("0b101", "binary: 5"), ("-42", "decimal: -42")],
    )
    def test_parse(self, app_context: AppContext, text: str, expected: str) -> None:
        cli.number(text, _context=app_context)
        assert output(app_context).strip() == expected

    @pytest.mark.parametrize("text", ["12a", "", "0x"])
    def test_invalid(self, app_context: AppContext, text: str) -> None:
        with pytest.raises(typer.Exit) as exc_info:
            cli.number(text, _context=app_context)
        assert exc_info.value.exit_code == 1
        assert "Cannot parse" in output(app_context)

    def test_negative_from_command_line(
        self, temp_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a leading minus is read as the literal, not an option."""
        monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "absent.yaml"))
        result = CliRunner().invoke(cli.app, ["number", "-42"])
        assert result.exit_code == 0
        assert "-42" in result.output


class TestMime:
    """Tests for mime command."""

    def test_known(self, app_context: AppContext) -> None:
        cli.mime("report.pdf", _context=app_context)
        assert output(app_context).strip() == "report.pdf: application/pdf"

    def test_unknown(self, app_context: AppContext) -> None:
        cli.mime("x.unknownext", _context=app_context)
        assert "application/others" in output(app_context)


class TestLoadContext:
    """Tests for building the production context."""

    def test_invalid_settings_exit(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a bad settings file ends the command with status 1."""
        path = tmp_path / "config.yaml"
        path.write_text("logLevel: verbose\n")
        monkeypatch.setenv(CONFIG_ENV, str(path))
        with pytest.raises(typer.Exit) as exc_info:
            cli._load_context(None)
        assert exc_info.value.exit_code == 1
        assert "Invalid settings file" in capsys.readouterr().err
