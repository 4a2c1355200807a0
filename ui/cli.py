# ui/cli.py
# -*- coding: utf-8 -*-
"""
trophy-todo command line.

Commands:
  status                 Session state and reward
  add/edit/rm/list       Task editing
  check/uncheck          Tick tasks off (running only)
  reorder ID...          New task order
  start/done/reset       Session lifecycle
  trophies               Trophy histogram
  title/colors           Cosmetics
"""

import functools
import logging
from dataclasses import dataclass

import click
from rich.console import Console
from rich.table import Table

from config import get_settings
from core.errors import TodoError
from core.trophy_engine import tier_title
from domain.models import ClearMode, Session
from services.session_service import SessionService
from services.stats_service import StatsService
from services.task_service import TaskService
from storage.db import Database

console = Console()

STATUS_STYLE = {
    "planning": "yellow",
    "running": "green",
    "finished": "blue",
}


@dataclass
class AppContext:
    db: Database
    sessions: SessionService
    tasks: TaskService
    stats: StatsService


def build_context(db_path: str, clear_mode: ClearMode) -> AppContext:
    db = Database(db_path=db_path)
    db.init_schema()
    return AppContext(
        db=db,
        sessions=SessionService(db, clear_mode=clear_mode),
        tasks=TaskService(db),
        stats=StatsService(db),
    )


def _guard(fn):
    """Turn domain errors into clean CLI failures."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except TodoError as e:
            raise click.ClickException(str(e))

    return wrapper


def _print_session(s: Session) -> None:
    style = STATUS_STYLE.get(s.status.value, "white")
    console.print(f"[bold]{s.title}[/bold]  [{style}]{s.status.value}[/{style}]")
    if s.start_time:
        console.print(f"  started: {s.start_time:%Y-%m-%d %H:%M}")
    if s.end_time:
        console.print(f"  finished: {s.end_time:%Y-%m-%d %H:%M}")


def _print_reward(app: AppContext) -> None:
    reward = app.stats.reward_summary()
    if not reward:
        return
    console.print(
        f"[bold yellow]{reward['title']} Achiever![/bold yellow] "
        f"tier {reward['tier']} - {reward['duration']}, "
        f"{reward['completed_count']} done"
    )


@click.group()
@click.option("--db", "db_path", default=None, help="SQLite database path.")
@click.option(
    "--clear-mode",
    type=click.Choice([m.value for m in ClearMode]),
    default=None,
    help="Which tasks reset removes.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, db_path, clear_mode, verbose):
    """Plan a to-do list, run it, earn a trophy."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = build_context(
        db_path or settings.db_path,
        ClearMode(clear_mode) if clear_mode else settings.clear_mode,
    )
    ctx.obj = app
    ctx.call_on_close(app.db.close)


@cli.command()
@click.pass_obj
def status(app: AppContext):
    """Show session state."""
    _print_session(app.sessions.get_session())
    _print_reward(app)


@cli.command("list")
@click.pass_obj
def list_tasks(app: AppContext):
    """List tasks in order."""
    tasks = app.tasks.list_tasks()
    if not tasks:
        console.print("[dim]No tasks.[/dim]")
        return
    for t in tasks:
        box = "[green]x[/green]" if t.completed else " "
        console.print(f"[{box}] {t.id:>3}  {t.content}")


@cli.command()
@click.argument("content")
@click.pass_obj
@_guard
def add(app: AppContext, content):
    """Add a task."""
    t = app.tasks.create_task(content)
    console.print(f"[green]Added #{t.id}[/green] {t.content}")


@cli.command()
@click.argument("task_id", type=int)
@click.argument("content")
@click.pass_obj
@_guard
def edit(app: AppContext, task_id, content):
    """Change a task's text."""
    t = app.tasks.rename_task(task_id, content)
    console.print(f"#{t.id} {t.content}")


@cli.command()
@click.argument("task_id", type=int)
@click.pass_obj
@_guard
def rm(app: AppContext, task_id):
    """Delete a task."""
    app.tasks.delete_task(task_id)
    console.print(f"Deleted #{task_id}")


@cli.command()
@click.argument("task_id", type=int)
@click.pass_obj
@_guard
def check(app: AppContext, task_id):
    """Mark a task done."""
    t = app.tasks.set_completed(task_id, True)
    console.print(f"[green]Checked[/green] #{t.id} {t.content}")


@cli.command()
@click.argument("task_id", type=int)
@click.pass_obj
@_guard
def uncheck(app: AppContext, task_id):
    """Mark a task not done."""
    t = app.tasks.set_completed(task_id, False)
    console.print(f"Unchecked #{t.id} {t.content}")


@cli.command()
@click.argument("task_ids", type=int, nargs=-1, required=True)
@click.pass_obj
@_guard
def reorder(app: AppContext, task_ids):
    """Set task order to the given ids."""
    for t in app.tasks.reorder_tasks(task_ids):
        console.print(f"{t.order:>3}  #{t.id} {t.content}")


@cli.command()
@click.pass_obj
@_guard
def start(app: AppContext):
    """Start the session (needs at least one task)."""
    s = app.sessions.start_session()
    if not s.is_running:
        raise click.ClickException("Nothing to start: add a task first.")
    _print_session(s)


@cli.command()
@click.pass_obj
@_guard
def done(app: AppContext):
    """Finish the session and collect the trophy."""
    before = app.sessions.get_session()
    s = app.sessions.complete_session()
    if not s.is_finished:
        raise click.ClickException("Session is not running or no task is checked.")
    if before.is_finished:
        console.print("[dim]Already finished.[/dim]")
    _print_reward(app)


@cli.command()
@click.pass_obj
@_guard
def reset(app: AppContext):
    """Back to planning; clear tasks per clear mode."""
    _print_session(app.sessions.reset_session())


@cli.command()
@click.pass_obj
def trophies(app: AppContext):
    """Show the trophy histogram."""
    summary = app.stats.trophy_summary()
    table = Table(title="Trophies")
    table.add_column("Tier", justify="right")
    table.add_column("Title")
    table.add_column("Count", justify="right")

    for tier, count in sorted(summary["counts"].items()):
        table.add_row(str(tier), tier_title(tier), str(count))
    console.print(table)
    console.print(f"Total: {summary['total']}")


@cli.command()
@click.argument("text")
@click.pass_obj
@_guard
def title(app: AppContext, text):
    """Rename the list."""
    _print_session(app.sessions.update_session(title=text))


@cli.command()
@click.option("--paper", default=None, help="Paper colour, #rrggbb.")
@click.option("--background", default=None, help="Background colour, #rrggbb.")
@click.pass_obj
@_guard
def colors(app: AppContext, paper, background):
    """Change paper/background colours."""
    s = app.sessions.update_session(paper_color=paper, background_color=background)
    console.print(f"paper {s.paper_color}  background {s.background_color}")
