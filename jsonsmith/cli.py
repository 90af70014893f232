"""CLI entry point for jsonsmith."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from jsonsmith.config import JsonsmithConfig, load_config
from jsonsmith.config.loader import DEFAULT_CONFIG_TEMPLATE
from jsonsmith.convert.facade import ConversionFacade
from jsonsmith.convert.models import ConversionFailure, ConversionResult
from jsonsmith.diff import ChangeRecord
from jsonsmith.history.store import open_history_store
from jsonsmith.llm import create_llm_provider
from jsonsmith.logging_setup import configure_logging
from jsonsmith.repair import JsonRepairer, RepairError

app = typer.Typer(
    name="jsonsmith",
    help="Validate, format and convert JSON; repair syntax with an LLM.",
)

config_app = typer.Typer(help="Manage jsonsmith configuration.")
app.add_typer(config_app, name="config")

history_app = typer.Typer(help="Manage saved history entries.")
app.add_typer(history_app, name="history")

# Global state
_config: JsonsmithConfig | None = None

_SOURCE_HELP = "Input file, or '-' for stdin"
SECRET_MASK = "********"


def _get_config() -> JsonsmithConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: str | None = typer.Option(None, "--config", "-c", help="Path to jsonsmith.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging("debug" if verbose else _config.log_level, _config.log_format)


def _read_source(source: str) -> str:
    """Read input text from a file path or stdin, enforcing the size limit."""
    cfg = _get_config()
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as e:
        rprint(f"[red]Error:[/red] cannot read {escape(source)}: {escape(str(e))}")
        raise typer.Exit(1)
    if not text:
        rprint("[red]Error:[/red] empty input")
        raise typer.Exit(1)
    if len(text) > cfg.limits.max_input_chars:
        rprint(f"[red]Error:[/red] input too large (max {cfg.limits.max_input_chars} chars)")
        raise typer.Exit(1)
    return text


def _emit(result: ConversionResult, output: str | None) -> None:
    if isinstance(result, ConversionFailure):
        rprint(f"[red]Invalid:[/red] {escape(result.message)}")
        raise typer.Exit(1)
    if output:
        Path(output).write_text(result.text, encoding="utf-8")
        rprint(f"[green]Wrote[/green] {output}")
    else:
        typer.echo(result.text)


def _facade() -> ConversionFacade:
    return ConversionFacade(_get_config().yaml)


# ---------------------------------------------------------------------------
# Conversion commands
# ---------------------------------------------------------------------------


@app.command("format")
def format_cmd(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    indent: str = typer.Option("2", "--indent", "-i", help="Indent width (0-10) or 'tab'"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Validate and pretty-print JSON."""
    _emit(_facade().format(_read_source(source), indent), output)


@app.command()
def minify(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Validate and minify JSON."""
    _emit(_facade().minify(_read_source(source)), output)


@app.command("to-markdown")
def to_markdown(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Render JSON as a Markdown document."""
    _emit(_facade().to_markdown(_read_source(source)), output)


@app.command("from-markdown")
def from_markdown(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Extract JSON from fenced code blocks in a Markdown document."""
    _emit(_facade().from_markdown(_read_source(source)), output)


@app.command("to-yaml")
def to_yaml(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Convert JSON to YAML."""
    _emit(_facade().to_yaml(_read_source(source)), output)


@app.command("from-yaml")
def from_yaml(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result to file"),
) -> None:
    """Convert YAML to JSON."""
    _emit(_facade().from_yaml(_read_source(source)), output)


# ---------------------------------------------------------------------------
# Repair
# ---------------------------------------------------------------------------


def _display_changes(changes: list[ChangeRecord]) -> None:
    table = Table(title=f"Changed lines ({len(changes)})")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Original", style="red")
    table.add_column("Fixed", style="green")
    for change in changes:
        table.add_row(str(change.line_number), escape(change.original), escape(change.revised))
    rprint(table)


@app.command()
def fix(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    output: str | None = typer.Option(None, "--output", "-o", help="Write fixed JSON to file"),
    show_changes: bool = typer.Option(
        True, "--changes/--no-changes", help="Show the changed lines"
    ),
) -> None:
    """Repair JSON syntax errors with an LLM."""
    cfg = _get_config()
    text = _read_source(source)
    try:
        provider = create_llm_provider(cfg.llm)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        result = asyncio.run(JsonRepairer(provider).repair(text))
    except RepairError as e:
        rprint(f"[red]AI fix failed:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if show_changes:
        if result.changes:
            _display_changes(result.changes)
        else:
            rprint("[dim]No lines changed.[/dim]")
    if not result.valid:
        rprint("[yellow]Warning:[/yellow] the repaired text still does not parse as JSON")

    if output:
        Path(output).write_text(result.fixed, encoding="utf-8")
        rprint(f"[green]Wrote[/green] {output}")
    else:
        typer.echo(result.fixed)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from jsonsmith.server import create_app

    cfg = _get_config()
    bind_host = host or cfg.server.host
    bind_port = port or cfg.server.port
    rprint(f"[bold]jsonsmith[/bold] listening on http://{bind_host}:{bind_port}")
    uvicorn.run(create_app(cfg), host=bind_host, port=bind_port, log_config=None)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


def _open_store():
    cfg = _get_config()
    store = open_history_store(cfg.history)
    if store is None:
        rprint("[red]Error:[/red] history is not available")
        raise typer.Exit(1)
    return store


@history_app.command("list")
def history_list(
    limit: int | None = typer.Option(None, "--limit", "-n", help="Max entries to show"),
) -> None:
    """List saved entries, newest first."""
    cfg = _get_config()
    store = _open_store()
    try:
        entries = store.list_recent(limit or cfg.history.list_limit)
    finally:
        store.close()

    if not entries:
        rprint("[dim]No history entries.[/dim]")
        raise typer.Exit(0)

    table = Table(title=f"History ({len(entries)})")
    table.add_column("ID", style="cyan")
    table.add_column("Saved", style="green")
    table.add_column("Label")
    for entry in entries:
        table.add_row(
            entry.id, entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"), escape(entry.label)
        )
    rprint(table)


@history_app.command("add")
def history_add(
    source: str = typer.Argument("-", help=_SOURCE_HELP),
    formatted: bool = typer.Option(
        True, "--format/--raw", help="Store a pretty-printed copy alongside the content"
    ),
) -> None:
    """Save a document to history."""
    text = _read_source(source)
    pretty = None
    if formatted:
        result = _facade().format(text)
        if result.valid:
            pretty = result.text
    store = _open_store()
    try:
        entry = store.add(text, pretty)
    finally:
        store.close()
    rprint(f"[green]Saved[/green] {entry.id} ({escape(entry.label)})")


@history_app.command("delete")
def history_delete(entry_id: str = typer.Argument(..., help="Entry id")) -> None:
    """Delete a saved entry."""
    store = _open_store()
    try:
        removed = store.delete(entry_id)
    finally:
        store.close()
    if removed:
        rprint(f"[green]Deleted[/green] {entry_id}")
    else:
        rprint(f"[yellow]No entry[/yellow] {entry_id}")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration (secrets masked)."""
    data = _get_config().model_dump()
    if data["server"]["auth_pass"]:
        data["server"]["auth_pass"] = SECRET_MASK
    rprint(Syntax(yaml.dump(data, default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default jsonsmith.yaml in current directory."""
    target = Path("jsonsmith.yaml")
    if target.exists() and not force:
        rprint("[yellow]jsonsmith.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
