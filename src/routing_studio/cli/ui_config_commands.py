"""CLI commands for the editor's UI config sidecar."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from routing_studio.routing.ui_config import JsonFileUiConfigStore, default_ui_config

app = typer.Typer(
    name="ui-config",
    help="Inspect or reset the local UI config (metric labels, class rules).",
    no_args_is_help=True,
)
console = Console()


def get_ui_store() -> JsonFileUiConfigStore:
    """Store at the configured location."""
    from routing_studio.config.settings import get_settings

    return JsonFileUiConfigStore(path=get_settings().ui_config_path)


@app.command("show")
def show():
    """Show metric definitions and class metadata."""
    cfg = get_ui_store().load()

    metrics = Table(title="Metrics", show_lines=False)
    metrics.add_column("Key", style="bold")
    metrics.add_column("Label")
    metrics.add_column("Range", justify="right")
    metrics.add_column("Higher is better", justify="center")
    for m in cfg.metric_definitions:
        metrics.add_row(
            m.key, m.label, f"{m.min:g}..{m.max:g} (step {m.step:g})",
            "[green]yes[/green]" if m.higher_is_better else "[yellow]no[/yellow]",
        )
    console.print(metrics)

    classes = Table(title="Classes", show_lines=False)
    classes.add_column("Key", style="bold")
    classes.add_column("Label")
    classes.add_column("Rules", style="dim")
    for key, meta in cfg.class_meta.items():
        rules = []
        for rule in meta.rules or []:
            if rule.type == "tag":
                rules.append(f"tag:{rule.tag}")
            else:
                rules.append(f"{rule.metric}{rule.op}{rule.value:g}")
        classes.add_row(key, meta.label, ", ".join(rules) or "-")
    console.print(classes)


@app.command("reset")
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Replace the stored UI config with the built-in defaults."""
    if not yes and not typer.confirm("Reset UI config to defaults?"):
        raise typer.Exit()
    store = get_ui_store()
    store.save(default_ui_config())
    console.print(f"  [green]✓[/green] UI config reset ([dim]{store.path}[/dim]).")
