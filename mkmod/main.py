"""
mkmod — CLI entrypoint.

Usage:
    mkmod my_mod
    mkmod path/to/my_mod --dir --no-test
    python -m mkmod.main --help
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from mkmod import __version__
from mkmod.core.errors import MkmodError
from mkmod.core.observability.logging_config import resolve_level, setup_logging


def _display(path: Path | str, base: Path | None) -> str:
    """Show *path* relative to *base* when possible."""
    path = Path(path)
    if base is not None:
        try:
            return str(path.relative_to(base))
        except ValueError:
            pass
    return str(path)


@click.command()
@click.version_option(version=__version__, prog_name="mkmod")
@click.argument("path")
@click.option("--dir", "directory", is_flag=True, help="Create module as a directory.")
@click.option(
    "--main",
    "force_main",
    is_flag=True,
    help="Add module to main.rs instead of lib.rs (only applies at the crate root).",
)
@click.option("--no-test", "no_test", is_flag=True, help="Do not add a test file.")
@click.option("--no-add", "no_add", is_flag=True, help="Do not add module to its parent.")
@click.option(
    "--private",
    is_flag=True,
    help="Declare the module as private in its parent (only applies when adding).",
)
@click.option("--dry-run", is_flag=True, help="Show what would be created, write nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    path: str,
    directory: bool,
    force_main: bool,
    no_test: bool,
    no_add: bool,
    private: bool,
    dry_run: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Create a new module at PATH and add it to its parent module."""
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    from mkmod.core.use_cases.create_module import create_module

    try:
        result = create_module(
            path,
            directory=directory,
            with_test=not no_test,
            register=not no_add,
            force_main=force_main,
            private=private,
            dry_run=dry_run,
            cwd=Path.cwd(),
        )
    except MkmodError as e:
        if as_json:
            click.echo(json.dumps({
                "error": str(e),
                "kind": type(e).__name__,
                "path": str(e.path) if e.path else None,
            }, indent=2))
        else:
            click.secho(f"❌ An error occurred: {e}", fg="red", err=True)
        sys.exit(e.exit_code)

    for warning in result.warnings:
        click.secho(f"⚠️  Warning: {warning}", fg="yellow", err=True)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    base = result.base_dir

    if quiet:
        return

    verb = "Would create" if result.dry_run else "Created"
    for f in result.files:
        click.secho(f"📝 {verb} {_display(f.path, base)}", fg="green")

    if result.registered_in is not None:
        target = _display(result.registered_in, base)
        if result.already_registered:
            click.echo(f"   '{result.declaration}' already in {target}")
        elif result.dry_run:
            click.echo(f"   Would add '{result.declaration}' to {target}")
        else:
            click.echo(f"   Added '{result.declaration}' to {target}")


if __name__ == "__main__":
    cli()
