"""CLI interface for inspecting board selection decisions."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from board_runner import __version__
from board_runner.config import BoardConfig, load_config
from board_runner.notion.webhook_summary import summarize_notion_webhook_event
from board_runner.tasks import (
    SelectionResult,
    Task,
    TaskHierarchy,
    pick_next_epic,
    pick_next_epic_child,
    pick_next_task,
)

# Load environment variables from .env file
load_dotenv()

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _read_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        console.print(f"[red]Invalid JSON in {path}:[/red] {escape(str(e))}")
        sys.exit(1)


def _load_tasks(path: Path) -> list[Task]:
    """Load a task snapshot: a JSON list, or an object with a "tasks" list."""
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("tasks")

    if not isinstance(data, list):
        console.print(f"[red]Expected a list of tasks in {path}[/red]")
        sys.exit(1)

    try:
        return [Task.model_validate(item) for item in data]
    except ValidationError as e:
        console.print(f"[red]Invalid task in {path}:[/red] {escape(str(e))}")
        sys.exit(1)


def _config(ctx: click.Context) -> BoardConfig:
    if "loaded_config" not in ctx.obj:
        try:
            ctx.obj["loaded_config"] = load_config(ctx.obj.get("config"))
        except (ValueError, yaml.YAMLError) as e:
            console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
            sys.exit(1)
    return ctx.obj["loaded_config"]


def _print_selection(result: SelectionResult, title: str) -> None:
    if not result.task:
        console.print("[yellow]No eligible task[/yellow]")
        return

    task = result.task
    lines = [
        f"[bold]{task.name or task.id}[/bold]",
        f"ID: [cyan]{task.id}[/cyan]",
        f"Status: {task.status}",
        f"Source: [green]{result.source.value}[/green]",
    ]
    if task.type:
        lines.append(f"Type: {task.type}")
    if task.parent_id:
        lines.append(f"Parent: {task.parent_id}")
    if task.created_time:
        lines.append(f"Created: {task.created_time}")

    console.print(Panel("\n".join(lines), title=title))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool) -> None:
    """Board Runner - pick the next board task for the coding agent."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    _setup_logging(verbose)


@cli.command("next")
@click.argument("tasks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--epics", is_flag=True, help="Work epic by epic: pick the epic, then its next child")
@click.pass_context
def next_task(ctx: click.Context, tasks_file: Path, epics: bool) -> None:
    """Show which task would be worked on next."""
    config = _config(ctx)
    tasks = _load_tasks(tasks_file)

    if not epics:
        _print_selection(pick_next_task(tasks, config), "Next Task")
        return

    epic_result = pick_next_epic(tasks, config)
    if not epic_result.task:
        console.print("[yellow]No epic to work on[/yellow]")
        return

    _print_selection(epic_result, "Epic")
    _print_selection(pick_next_epic_child(tasks, config, epic_result.task.id), "Next Child")


@cli.command("epics")
@click.argument("tasks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def epics_status(ctx: click.Context, tasks_file: Path) -> None:
    """List epics with their child completion."""
    config = _config(ctx)
    tasks = _load_tasks(tasks_file)
    done = config.notion.statuses.done

    hierarchy = TaskHierarchy(tasks, config)
    epics = hierarchy.epics()
    if not epics:
        console.print("[yellow]No epics found[/yellow]")
        return

    table = Table(title="Epics", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Status", style="yellow")
    table.add_column("Children", justify="right")
    table.add_column("Done", justify="right")
    table.add_column("Closable", style="green")

    for epic in epics:
        children = hierarchy.children_of(epic.id)
        done_count = sum(1 for child in children if child.status == done)
        closable = bool(children) and done_count == len(children) and epic.status != done
        table.add_row(
            epic.id,
            epic.name,
            epic.status,
            str(len(children)),
            str(done_count),
            "yes" if closable else "no",
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(epics)} epic(s)[/dim]")


@cli.command("webhook")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--status-property", help="Status property name (default: from config)")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def webhook(ctx: click.Context, payload_file: Path, status_property: str | None, as_json: bool) -> None:
    """Summarize a webhook payload."""
    if status_property is None:
        status_property = _config(ctx).notion.properties.status

    summary = summarize_notion_webhook_event(_read_json(payload_file), status_property)

    if as_json:
        click.echo(summary.model_dump_json())
        return

    console.print(
        f"Event: [cyan]{summary.event_type}[/cyan] | "
        f"Task: [cyan]{summary.task_id}[/cyan] | "
        f"Status: [green]{summary.status}[/green]"
    )


@cli.command("check-config")
@click.pass_context
def check_config(ctx: click.Context) -> None:
    """Validate and show the effective configuration."""
    config = _config(ctx)
    statuses = config.notion.statuses

    table = Table(title="Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Status: not started", statuses.not_started)
    table.add_row("Status: in progress", statuses.in_progress)
    table.add_row("Status: done", statuses.done)
    table.add_row("Epic type", config.notion.type_values.epic)
    table.add_row("Status property", config.notion.properties.status)
    table.add_row("Parent property", config.notion.properties.parent_item)
    table.add_row("Queue order", config.queue.order.value)
    table.add_row("Max tasks per run", str(config.queue.max_tasks_per_run))
    table.add_row("Poll interval (s)", str(config.queue.poll_interval_seconds))
    table.add_row("Debounce (s)", str(config.queue.debounce_seconds))
    table.add_row("Run on startup", "yes" if config.queue.run_on_startup else "no")

    console.print(table)
    console.print("[green]✓ Configuration is valid[/green]")


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
