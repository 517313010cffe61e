"""
Sapling CLI.

    sapling generate schema/calc.toml -o grammars
    sapling check -m sapling.toml
    sapling show schema/calc.toml --grammar calc
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sapling._version import get_version
from sapling.core import ir
from sapling.core.emit import write_grammar
from sapling.core.errors import SaplingError
from sapling.core.loader import generate_grammars
from sapling.core.manifest import MANIFEST_FILENAME, SaplingManifest, load_manifest

app = typer.Typer(
    help="Compile typed schema definitions into tree-sitter grammars.",
    no_args_is_help=True,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"sapling {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, force=True)


def _load_manifest_option(manifest: Path | None) -> SaplingManifest | None:
    """Explicit manifest, or sapling.toml in the current directory if present."""
    if manifest is not None:
        return load_manifest(manifest.resolve())
    default = Path.cwd() / MANIFEST_FILENAME
    if default.exists():
        return load_manifest(default)
    return None


def _configure_logging(mf: SaplingManifest | None) -> None:
    # --verbose already installed a handler; basicConfig is then a no-op
    level = mf.log.level_value if mf else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _resolve_schema(schema: Path | None, mf: SaplingManifest | None) -> Path:
    if schema is not None:
        return schema
    if mf is not None:
        return mf.schema_path
    err_console.print(f"[red]No schema given and no {MANIFEST_FILENAME} found.[/red]")
    raise typer.Exit(code=1)


def _compile(
    schema: Path | None, manifest: Path | None
) -> tuple[list[ir.Grammar], SaplingManifest | None]:
    try:
        mf = _load_manifest_option(manifest)
        _configure_logging(mf)
        schema_path = _resolve_schema(schema, mf)
        if not schema_path.exists():
            err_console.print(f"[red]Schema not found: {escape(str(schema_path))}[/red]")
            raise typer.Exit(code=1)
        return generate_grammars(schema_path), mf
    except SaplingError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command("generate")
def generate_command(
    schema: Path | None = typer.Argument(None, help="Schema file (.toml or .json)."),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help=f"Path to {MANIFEST_FILENAME}."
    ),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory."),
    indent: int | None = typer.Option(None, "--indent", help="JSON indentation."),
) -> None:
    """Compile every grammar in the schema and write its grammar.json."""
    grammars, mf = _compile(schema, manifest)

    out_dir = out or (mf.output_dir if mf else Path("grammars"))
    if indent is None:
        indent = mf.output.indent if mf else 2

    for grammar in grammars:
        path = write_grammar(grammar, out_dir, indent=indent)
        console.print(f"  [green]✓[/green] {escape(grammar.name)} -> {escape(str(path))}")

    if not grammars:
        console.print("[yellow]No grammar modules found.[/yellow]")


@app.command("check")
def check_command(
    schema: Path | None = typer.Argument(None, help="Schema file (.toml or .json)."),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help=f"Path to {MANIFEST_FILENAME}."
    ),
) -> None:
    """Compile the schema without writing anything."""
    grammars, _ = _compile(schema, manifest)
    if grammars:
        table = Table(title="Grammars")
        table.add_column("Grammar", style="cyan")
        table.add_column("Rules", justify="right")
        table.add_column("Extras", justify="right")
        for grammar in grammars:
            table.add_row(
                escape(grammar.name),
                str(len(grammar.rules)),
                str(len(grammar.extras)),
            )
        console.print(table)
    console.print("[green]Schema is valid.[/green]")


@app.command("show")
def show_command(
    schema: Path = typer.Argument(..., help="Schema file (.toml or .json)."),
    grammar_name: str | None = typer.Option(
        None, "--grammar", "-g", help="Only print the grammar with this name."
    ),
    indent: int = typer.Option(2, "--indent", help="JSON indentation."),
) -> None:
    """Print compiled grammar JSON to stdout."""
    grammars, _ = _compile(schema, None)
    if grammar_name is not None:
        grammars = [g for g in grammars if g.name == grammar_name]
        if not grammars:
            err_console.print(f"[red]No grammar named '{escape(grammar_name)}'.[/red]")
            raise typer.Exit(code=1)
    for grammar in grammars:
        typer.echo(grammar.dumps(indent=indent))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
