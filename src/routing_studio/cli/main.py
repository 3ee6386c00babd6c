"""Entry point for the routing-studio command."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routing_studio import __version__
from routing_studio.cli.ui_config_commands import app as ui_config_app
from routing_studio.cli.ui_config_commands import get_ui_store
from routing_studio.config.constants import ROUTING_FILE_SUFFIX
from routing_studio.routing.errors import ParseError, SchemaViolationError
from routing_studio.routing.schema import (
    load_document,
    serialize_document,
    write_document,
    write_text_atomic,
)
from routing_studio.routing.templates import create_starter_document
from routing_studio.routing.types import MetricRule, RoutingDocument, Severity, TagRule
from routing_studio.routing.validate import (
    suggest_models_for_class,
    summarize_issues,
    validate_routing,
)

app = typer.Typer(
    name="routing-studio",
    help="Edit, validate and get model suggestions for routing files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(ui_config_app, name="ui-config")
console = Console()

logger = logging.getLogger("routing_studio.cli")

_SEVERITY_STYLE = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

_METRIC_RE = re.compile(r"^\s*([A-Za-z_]\w*)\s*(>=|<=|>|<)\s*([-+]?\d+(?:\.\d+)?|[-+]?\.\d+)\s*$")


def _configure_logging(verbose: bool) -> None:
    from routing_studio.config.settings import get_settings

    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    if version:
        console.print(f"routing-studio [dim]v{__version__}[/dim]")
        raise typer.Exit()
    _configure_logging(verbose)


def _load_or_exit(path: Path) -> RoutingDocument:
    """Load a routing file, printing the failure and exiting 1 if it can't be used."""
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        return load_document(path)
    except SchemaViolationError as exc:
        console.print(f"[red]{exc.message}[/red]")
        for issue in exc.issues:
            console.print(f"  [bold]{issue.path or '<root>'}[/bold]: {issue.message}")
        raise typer.Exit(1)
    except ParseError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)


def parse_metric_rule(expr: str) -> MetricRule:
    """Parse ``"cost>=0.5"`` into a metric rule."""
    match = _METRIC_RE.match(expr)
    if match is None:
        raise typer.BadParameter(
            f"Invalid metric rule {expr!r}. Use <metric><op><value>, e.g. 'cost>=0.5'."
        )
    metric, op, value = match.groups()
    return MetricRule(metric=metric, op=op, value=float(value))


@app.command()
def new(
    path: Path = typer.Argument(Path("starter" + ROUTING_FILE_SUFFIX), help="Where to write the file"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a starter routing file."""
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use [bold]--force[/bold] to overwrite.")
        raise typer.Exit(1)
    write_document(path, create_starter_document())
    logger.info("cli.new %s", path)
    console.print(f"  [green]✓[/green] Wrote starter routing file to [bold]{path}[/bold]")


@app.command()
def validate(
    path: Path = typer.Argument(help="Routing file to check"),
    as_json: bool = typer.Option(False, "--json", help="Print issues as JSON"),
):
    """Check a routing file and list integrity issues. Exits 1 on errors."""
    doc = _load_or_exit(path)
    issues = validate_routing(doc)
    summary = summarize_issues(issues)
    logger.info("cli.validate %s errors=%d warnings=%d", path, summary.errors, summary.warnings)

    if as_json:
        payload = [
            {"severity": i.severity.value, "path": i.path, "message": i.message}
            for i in issues
        ]
        console.print_json(json.dumps(payload))
    elif not issues:
        console.print(f"  [green]✓[/green] {path}: no issues found.")
    else:
        table = Table(title=f"Issues in {path.name}", show_lines=False)
        table.add_column("Severity")
        table.add_column("Path", style="bold")
        table.add_column("Message")
        for issue in issues:
            style = _SEVERITY_STYLE[issue.severity]
            table.add_row(f"[{style}]{issue.severity.value}[/{style}]", issue.path, issue.message)
        console.print(table)
        console.print(f"\n  [dim]{summary.errors} error(s), {summary.warnings} warning(s).[/dim]\n")

    if summary.errors:
        raise typer.Exit(1)


@app.command()
def suggest(
    path: Path = typer.Argument(help="Routing file to read models from"),
    class_key: str = typer.Option("", "--class", "-c", help="Use the rules configured for this class"),
    tags: list[str] = typer.Option([], "--tag", "-t", help="Require a tag (repeatable)"),
    metrics: list[str] = typer.Option([], "--metric", "-m", help="Metric threshold, e.g. 'cost>=0.5' (repeatable)"),
):
    """Rank models matching every rule, best reasoning first."""
    rules: list[TagRule | MetricRule] = []
    if class_key:
        meta = get_ui_store().load().class_meta.get(class_key)
        if meta is None:
            console.print(f"[red]Class '{class_key}' has no UI metadata.[/red]")
            raise typer.Exit(1)
        rules.extend(meta.rules or [])
    rules.extend(TagRule(tag=t) for t in tags)
    rules.extend(parse_metric_rule(m) for m in metrics)

    if not rules:
        console.print("[yellow]No rules given.[/yellow] Pass --tag, --metric or a --class with rules.")
        raise typer.Exit(1)

    doc = _load_or_exit(path)
    suggested = suggest_models_for_class(doc, rules)
    if not suggested:
        console.print("[dim]No models match these rules.[/dim]")
        raise typer.Exit()

    table = Table(title="Suggested models", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Model", style="bold")
    table.add_column("Reasoning", justify="right")
    table.add_column("Latency", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Tags", style="dim")
    for rank, model_id in enumerate(suggested, start=1):
        info = doc.models[model_id]
        table.add_row(
            str(rank),
            model_id,
            f"{info.reasoning:.2f}",
            f"{info.latency:.2f}",
            f"{info.cost:.2f}",
            ", ".join(info.tags),
        )
    console.print(table)


@app.command("format")
def format_file(
    path: Path = typer.Argument(help="Routing file to rewrite"),
    check: bool = typer.Option(False, "--check", help="Only report whether the file would change"),
):
    """Rewrite a routing file in canonical form (2-space indent, trailing newline)."""
    doc = _load_or_exit(path)
    original = path.read_text(encoding="utf-8")
    formatted = serialize_document(doc)

    if formatted == original:
        console.print(f"  [dim]{path} is already formatted.[/dim]")
        return
    if check:
        console.print(f"[yellow]{path} would be reformatted.[/yellow]")
        raise typer.Exit(1)

    write_text_atomic(path, formatted)
    console.print(f"  [green]✓[/green] Formatted [bold]{path}[/bold]")


if __name__ == "__main__":
    app()
