"""CLI commands using Typer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import typer

from iofs import __version__
from iofs.context import create_context
from iofs.errors import ConvertError
from iofs.fs.directory import DirectoryHandle
from iofs.fs.file import FileHandle
from iofs.fs.filedir import EntryHandle
from iofs.fs.pathstr import normalize as normalize_path
from iofs.io.convert import convert_buffer
from iofs.io.number import NumberSystem, trim
from iofs.types import EntryInfo

if TYPE_CHECKING:
    from iofs.context import AppContext

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="iofs",
    help="Inspect, copy, move and compare files and directories",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"iofs v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log filesystem operations")
    ] = False,
) -> None:
    """Inspect, copy, move and compare files and directories."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_context(context: AppContext | None) -> AppContext:
    """Return the injected context or build the production one."""
    if context is not None:
        return context
    try:
        ctx = create_context()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    if not logging.getLogger().isEnabledFor(logging.DEBUG):
        logging.getLogger("iofs").setLevel(ctx.settings.log_level)
    return ctx


def _open_entry(ctx: AppContext, path: str) -> EntryHandle:
    """Open an existing entry or exit with an error."""
    try:
        return EntryHandle.open(path, ctx.cwd)
    except OSError as e:
        ctx.tui.show_error(f"Cannot open '{path}': {e.strerror or e}")
        raise typer.Exit(1) from e


@app.command("normalize")
def normalize(
    path: Annotated[str, typer.Argument(help="Path to normalize")],
    _context=None,
) -> None:
    """Print the canonical absolute form of a path."""
    ctx = _load_context(_context)
    ctx.tui.console.print(normalize_path(path, ctx.cwd), markup=False, highlight=False)


@app.command("info")
def info(
    path: Annotated[str, typer.Argument(help="File or directory")],
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON")] = False,
    _context=None,
) -> None:
    """Show name, kind, size and modification time of an entry."""
    ctx = _load_context(_context)
    entry = _open_entry(ctx, path)
    content_type = entry.as_file().content_type() if entry.is_file() else None
    snapshot = EntryInfo.from_entry(entry, content_type=content_type)
    if as_json:
        ctx.tui.console.print_json(snapshot.model_dump_json())
    else:
        ctx.tui.show_info(snapshot)


@app.command("ls")
def ls(
    directory: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    show_all: Annotated[bool, typer.Option("--all", "-a", help="Include hidden entries")] = False,
    _context=None,
) -> None:
    """List the children of a directory."""
    ctx = _load_context(_context)
    handle = DirectoryHandle.open(directory, ctx.cwd)
    if not handle.exists():
        ctx.tui.show_error(f"Directory '{directory}' not found")
        raise typer.Exit(1)

    include_hidden = show_all or ctx.settings.show_hidden
    entries = [
        child
        for child in handle.children()
        if include_hidden or not child.name().startswith(".")
    ]
    entries.sort(key=lambda child: child.name())
    ctx.tui.show_entries(handle.full_name(), entries)


def _transfer(ctx: AppContext, source: str, dest: str, force: bool, is_move: bool) -> None:
    entry = _open_entry(ctx, source)
    target = normalize_path(dest, ctx.cwd)
    verb = "Moved" if is_move else "Copied"
    try:
        if force:
            entry.inner.cover_new(target, is_move)
        elif is_move:
            entry.move_new(target)
        else:
            entry.copy_new(target)
    except FileExistsError as e:
        ctx.tui.show_error(f"'{target}' already exists (use --force to replace it)")
        raise typer.Exit(1) from e
    except (OSError, ValueError) as e:
        logger.exception("%s failed for %s", verb, source)
        ctx.tui.show_error(str(e))
        raise typer.Exit(1) from e
    ctx.tui.show_success(f"{verb} '{source}' to '{target}'")


@app.command("cp")
def cp(
    source: Annotated[str, typer.Argument(help="File or directory to copy")],
    dest: Annotated[str, typer.Argument(help="Destination path")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Replace the destination")] = False,
    _context=None,
) -> None:
    """Copy a file or a directory tree."""
    ctx = _load_context(_context)
    _transfer(ctx, source, dest, force, is_move=False)


@app.command("mv")
def mv(
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    dest: Annotated[str, typer.Argument(help="Destination path")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Replace the destination")] = False,
    _context=None,
) -> None:
    """Move a file or a directory tree."""
    ctx = _load_context(_context)
    _transfer(ctx, source, dest, force, is_move=True)


@app.command("rm")
def rm(
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
    _context=None,
) -> None:
    """Delete a file or a whole directory tree."""
    ctx = _load_context(_context)
    entry = _open_entry(ctx, path)
    try:
        entry.delete()
    except OSError as e:
        ctx.tui.show_error(f"Cannot delete '{path}': {e.strerror or e}")
        raise typer.Exit(1) from e
    ctx.tui.show_success(f"Deleted '{entry.full_name()}'")


@app.command("eq")
def eq(
    first: Annotated[str, typer.Argument(help="First file or directory")],
    second: Annotated[str, typer.Argument(help="Second file or directory")],
    _context=None,
) -> None:
    """Compare two files byte for byte, or two directory trees.

    Exits with status 1 when they differ.
    """
    ctx = _load_context(_context)
    a = _open_entry(ctx, first)
    b = _open_entry(ctx, second)
    if a.is_file() and b.is_file():
        same = a.as_file().content_equal(b.as_file(), ctx.settings.compare_chunk_size)
    else:
        same = a.content_equal(b)

    if not same:
        ctx.tui.show_warning(f"'{first}' and '{second}' differ")
        raise typer.Exit(1)
    ctx.tui.show_success(f"'{first}' and '{second}' are identical")


@app.command("size")
def size(
    path: Annotated[str, typer.Argument(help="File or directory")],
    _context=None,
) -> None:
    """Print the size in bytes (recursive for directories)."""
    ctx = _load_context(_context)
    entry = _open_entry(ctx, path)
    ctx.tui.show_value(entry.full_name(), entry.size_bytes())


@app.command("number", context_settings={"ignore_unknown_options": True})
def number(
    text: Annotated[str, typer.Argument(help="Literal such as 42, -7, 0x1F, 0o17 or 0b101")],
    _context=None,
) -> None:
    """Parse an integer literal and print its decimal value."""
    ctx = _load_context(_context)
    try:
        value = convert_buffer(text, int)
    except ConvertError as e:
        ctx.tui.show_error(f"Cannot parse '{text}': {e}")
        raise typer.Exit(1) from e
    system = NumberSystem.detect(trim(text))
    ctx.tui.show_value(system.name.lower(), value)


@app.command("mime")
def mime(
    path: Annotated[str, typer.Argument(help="File name or path")],
    _context=None,
) -> None:
    """Print the content type for a file's extension."""
    ctx = _load_context(_context)
    handle = FileHandle.open(path, ctx.cwd)
    ctx.tui.show_value(handle.name(), handle.content_type())


if __name__ == "__main__":
    app()
