"""CLI commands using Typer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from buildfs.context import AppContext

import typer

from buildfs import __version__
from buildfs.config import ConfigError, load_settings
from buildfs.console import Output
from buildfs.context import create_context
from buildfs.types import EntryType

app = typer.Typer(
    name="buildfs",
    help="Filesystem operations against the real disk or an in-memory tree",
    no_args_is_help=True,
)

output = Output()


@dataclass
class _GlobalOptions:
    """Options captured by the app callback."""

    config: Path | None = None
    seed: Path | None = None
    verbose: bool = False


_options = _GlobalOptions()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        output.console.print(f"buildfs v{__version__}")
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
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Settings file (YAML)")
    ] = None,
    seed: Annotated[
        Path | None,
        typer.Option("--seed", "-s", help="Operate on an in-memory tree seeded from YAML"),
    ] = None,
) -> None:
    """Filesystem operations against the real disk or an in-memory tree."""
    _options.config = config
    _options.seed = seed
    _options.verbose = verbose


def _get_context(context: AppContext | None) -> AppContext:
    """Use an injected context or build one from the global options.

    Raises:
        typer.Exit: If settings or the seed cannot be loaded.
    """
    if context is not None:
        return context

    try:
        settings = load_settings(_options.config)
        level = logging.DEBUG if _options.verbose else settings.log_level
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return create_context(settings=settings, seed=_options.seed)
    except ConfigError as e:
        output.show_error(str(e))
        raise typer.Exit(1) from e


def _fail(message: str) -> typer.Exit:
    """Report a failed operation and build the exit to raise."""
    output.show_error(message)
    return typer.Exit(1)


# ============================================================================
# Queries
# ============================================================================


@app.command("exists")
def exists(
    path: Annotated[str, typer.Argument(help="Absolute path")],
    _context=None,
) -> None:
    """Check whether a path exists."""
    ctx = _get_context(_context)
    if not ctx.filesystem.exists(path):
        raise _fail(f"{path} does not exist")
    output.show_success(f"{path} exists")


@app.command("info")
def info(
    path: Annotated[str, typer.Argument(help="Absolute path")],
    _context=None,
) -> None:
    """Show the kind and permissions of a path."""
    ctx = _get_context(_context)
    if not ctx.filesystem.exists(path) and ctx.filesystem.entry_type(path) is None:
        raise _fail(f"{path} does not exist")
    output.show_info(ctx.filesystem, path)


@app.command("cat")
def cat(
    path: Annotated[str, typer.Argument(help="File to read")],
    offset: Annotated[int, typer.Option("--offset", "-o", help="Byte offset")] = 0,
    length: Annotated[
        int | None, typer.Option("--length", "-n", help="Bytes to read (default: to end)")
    ] = None,
    _context=None,
) -> None:
    """Print the contents of a file."""
    ctx = _get_context(_context)
    data = ctx.filesystem.read(path, offset, length)
    if data is None:
        raise _fail(f"Cannot read {path}")
    typer.echo(data, nl=False)


@app.command("ls")
def ls(
    path: Annotated[str, typer.Argument(help="Directory to list")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Descend into subdirectories")] = False,
    _context=None,
) -> None:
    """List the contents of a directory."""
    ctx = _get_context(_context)
    names = ctx.filesystem.list_directory(path, recursive)
    if names is None:
        raise _fail(f"Cannot read directory {path}")
    output.show_listing(path, names)


@app.command("readlink")
def readlink(
    path: Annotated[str, typer.Argument(help="Symbolic link")],
    _context=None,
) -> None:
    """Print the target of a symbolic link."""
    ctx = _get_context(_context)
    target = ctx.filesystem.read_symbolic_link(path)
    if target is None:
        raise _fail(f"{path} is not a symbolic link")
    output.show_text(target)


@app.command("realpath")
def realpath(
    path: Annotated[str, typer.Argument(help="Path to resolve")],
    _context=None,
) -> None:
    """Print a path with symbolic links resolved."""
    ctx = _get_context(_context)
    resolved = ctx.filesystem.resolve_path(path)
    if not resolved:
        raise _fail(f"Cannot resolve {path}")
    output.show_text(resolved)


@app.command("find")
def find(
    name: Annotated[str, typer.Argument(help="File name")],
    paths: Annotated[
        list[str] | None, typer.Option("--path", "-p", help="Directory to search (repeatable)")
    ] = None,
    _context=None,
) -> None:
    """Find the first search directory containing a file."""
    ctx = _get_context(_context)
    found = ctx.filesystem.find_file(name, paths or ctx.settings.search_paths)
    if found is None:
        raise _fail(f"{name} not found")
    output.show_text(found)


@app.command("which")
def which(
    name: Annotated[str, typer.Argument(help="Executable name")],
    paths: Annotated[
        list[str] | None, typer.Option("--path", "-p", help="Directory to search (repeatable)")
    ] = None,
    _context=None,
) -> None:
    """Find the first search directory containing an executable."""
    ctx = _get_context(_context)
    found = ctx.filesystem.find_executable(name, paths or ctx.settings.search_paths)
    if found is None:
        raise _fail(f"{name} not found")
    output.show_text(found)


# ============================================================================
# Mutations
# ============================================================================


@app.command("write")
def write(
    path: Annotated[str, typer.Argument(help="File to write")],
    text: Annotated[str, typer.Argument(help="Contents (UTF-8)")],
    _context=None,
) -> None:
    """Create or replace a file."""
    ctx = _get_context(_context)
    if not ctx.filesystem.write(path, text.encode("utf-8")):
        raise _fail(f"Cannot write {path}")
    output.show_success(f"Wrote {path}")


@app.command("touch")
def touch(
    path: Annotated[str, typer.Argument(help="File to create")],
    _context=None,
) -> None:
    """Create an empty file unless one exists."""
    ctx = _get_context(_context)
    if not ctx.filesystem.create_file(path):
        raise _fail(f"Cannot create {path}")
    output.show_success(f"Created {path}")


@app.command("mkdir")
def mkdir(
    path: Annotated[str, typer.Argument(help="Directory to create")],
    parents: Annotated[bool, typer.Option("--parents", "-p", help="Create missing parents")] = False,
    _context=None,
) -> None:
    """Create a directory."""
    ctx = _get_context(_context)
    if not ctx.filesystem.create_directory(path, parents):
        raise _fail(f"Cannot create directory {path}")
    output.show_success(f"Created {path}")


@app.command("ln")
def ln(
    target: Annotated[str, typer.Argument(help="Link target")],
    path: Annotated[str, typer.Argument(help="Link to create")],
    _context=None,
) -> None:
    """Create a symbolic link."""
    ctx = _get_context(_context)
    if not ctx.filesystem.write_symbolic_link(target, path):
        raise _fail(f"Cannot link {path} to {target}")
    output.show_success(f"Linked {path} -> {target}")


@app.command("rm")
def rm(
    path: Annotated[str, typer.Argument(help="Path to remove")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Remove directory contents")] = False,
    _context=None,
) -> None:
    """Remove a file, symbolic link, or directory."""
    ctx = _get_context(_context)
    fs = ctx.filesystem
    kind = fs.entry_type(path)

    if kind is EntryType.FILE:
        removed = fs.remove_file(path)
    elif kind is EntryType.SYMBOLIC_LINK:
        removed = fs.remove_symbolic_link(path)
    elif kind is EntryType.DIRECTORY:
        removed = fs.remove_directory(path, recursive)
    else:
        raise _fail(f"{path} does not exist")

    if not removed:
        raise _fail(f"Cannot remove {path}")
    output.show_success(f"Removed {path}")


@app.command("cp")
def cp(
    source: Annotated[str, typer.Argument(help="Path to copy")],
    destination: Annotated[str, typer.Argument(help="Path of the copy")],
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Copy directory contents")] = False,
    _context=None,
) -> None:
    """Copy a file, symbolic link, or directory."""
    ctx = _get_context(_context)
    fs = ctx.filesystem
    kind = fs.entry_type(source)

    if kind is EntryType.FILE:
        copied = fs.copy_file(source, destination)
    elif kind is EntryType.SYMBOLIC_LINK:
        copied = fs.copy_symbolic_link(source, destination)
    elif kind is EntryType.DIRECTORY:
        copied = fs.copy_directory(source, destination, recursive)
    else:
        raise _fail(f"{source} does not exist")

    if not copied:
        raise _fail(f"Cannot copy {source} to {destination}")
    output.show_success(f"Copied {source} to {destination}")


if __name__ == "__main__":
    app()
