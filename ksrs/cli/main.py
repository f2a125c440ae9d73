"""
Typer CLI for ksrs.

Commands:
    ksrs                 - Study session: due reviews plus new kanji
    ksrs add KANJI       - Add kanji to learn ('-' reads stdin)
    ksrs remove KANJI    - Remove kanji from the database
    ksrs reset KANJI     - Treat kanji as new again
    ksrs review KANJI    - Manually mark kanji as reviewed
    ksrs info            - Upcoming reviews
    ksrs stats           - Overall progress
    ksrs all             - List every kanji
    ksrs fix-db          - Check and repair the database

Usage:
    ksrs --new-count 5 --max-reviews 0
    echo 日本語 | ksrs add -
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from ..config import Settings, get_settings
from ..core.clock import local_now
from ..core.japanese import extract_kanji, has_kanji
from ..core.sm2 import Quality
from ..storage import Storage, StorageError, StoredItem, open_storage
from .browser import open_kanji
from .display import StorageStats, build_stats_table, format_review_day

app = typer.Typer(
    name="ksrs",
    help="Tool to help learning kanji",
    no_args_is_help=False,
    invoke_without_command=True,
)
console = Console()

PASSED = Quality.GRADE4
FAILED = Quality.GRADE2


# =============================================================================
# Helpers
# =============================================================================


@contextmanager
def storage_session() -> Iterator[Storage]:
    """Open the configured storage; storage failures end the command."""
    settings = get_settings()
    try:
        with open_storage(settings.storage_dir, settings.day_cutoff_hour) as storage:
            yield storage
    except StorageError as e:
        logger.error(f"Storage failure: {e}")
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def parse_kanji_arg(value: str | None) -> list[str] | None:
    """
    Kanji named on the command line.

    A single '-' reads the kanji from stdin. Returns None (after telling
    the user) when no kanji was given.
    """
    if value is None:
        console.print("Missing kanji!")
        return None

    text = sys.stdin.read() if value == "-" else value
    if not has_kanji(text):
        console.print("Missing kanji!")
        return None

    return extract_kanji(text)


def read_failed_input() -> list[str]:
    """Ask which kanji were not remembered."""
    answer = Prompt.ask("Enter kanji you want to learn again", default="", show_default=False)
    return extract_kanji(answer)


def apply_reviews(storage: Storage, items: list[StoredItem], failed: list[str]) -> list[str]:
    """Grade every item, failed ones as incorrect. Returns the reviewed literals."""
    reviewed = []
    for item in items:
        quality = FAILED if item.literal in failed else PASSED
        if storage.review(item.literal, quality):
            reviewed.append(item.literal)
    return reviewed


def pick_to_learn(
    storage: Storage,
    new_count: int,
    max_reviews: int,
    now: datetime | None = None,
) -> list[StoredItem]:
    """
    Items for a study session: due reviews first, then new items.

    Args:
        storage: Opened storage
        new_count: New items to introduce
        max_reviews: Due items to take (0 for all)
        now: Reference time

    Returns:
        Items in presentation order
    """
    due = storage.selector.due(now)
    if max_reviews > 0:
        due = due[:max_reviews]
    new = storage.selector.new()[:new_count]
    return storage.resolve(due + new)


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            rotation="1 MB",
            retention=3,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        )


# =============================================================================
# Study Session
# =============================================================================


@app.callback()
def main_callback(
    ctx: typer.Context,
    no_new: bool = typer.Option(False, "--no-new", help="Don't add new kanji, just review old"),
    max_reviews: Optional[int] = typer.Option(
        None,
        "--max-reviews",
        "--max-review",
        min=0,
        help="Max amount of reviews (0 for all)",
    ),
    new_count: Optional[int] = typer.Option(
        None,
        "--new-count",
        min=0,
        help="Specify how many new kanji you want to learn",
    ),
) -> None:
    """
    Tool to help learning kanji.

    Run without a subcommand to start a study session.
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings()
    new_count = 0 if no_new else (settings.new_count if new_count is None else new_count)
    max_reviews = settings.max_reviews if max_reviews is None else max_reviews

    with storage_session() as storage:
        to_learn = pick_to_learn(storage, new_count, max_reviews)
        if not to_learn:
            console.print("Nothing to learn nor review. Try adding some new kanji")
            return

        if not Confirm.ask("Do you want to start a review?", default=True):
            return

        has_reviews = any(i.is_learning for i in to_learn)
        if not has_reviews and not Confirm.ask("No reviews available. Learn more?", default=True):
            return

        open_kanji("".join(i.literal for i in to_learn))

        apply_reviews(storage, to_learn, read_failed_input())
        console.print("[green]✓[/green] Learning done")


# =============================================================================
# Item Commands
# =============================================================================


@app.command()
def add(kanji: Optional[str] = typer.Argument(None, help="Kanji to add, '-' for stdin")) -> None:
    """Adds kanji to learn."""
    literals = parse_kanji_arg(kanji)
    if literals is None:
        return

    with storage_session() as storage:
        added = [k for k in literals if storage.add(k)]

    if added:
        console.print(f"Added {','.join(added)}")
    else:
        console.print("Nothing to add")


@app.command()
def remove(kanji: Optional[str] = typer.Argument(None, help="Kanji to remove, '-' for stdin")) -> None:
    """Removes kanji from database."""
    literals = parse_kanji_arg(kanji)
    if literals is None:
        return

    with storage_session() as storage:
        removed = [k for k in literals if storage.remove(k)]

    if removed:
        console.print(f"Removed {','.join(removed)}")
    else:
        console.print("Nothing to remove")


@app.command()
def reset(kanji: Optional[str] = typer.Argument(None, help="Kanji to reset, '-' for stdin")) -> None:
    """Reset learn process of a kanji and treat it as a new item."""
    literals = parse_kanji_arg(kanji)
    if literals is None:
        return

    with storage_session() as storage:
        resetted = [k for k in literals if storage.reset(k)]

    if resetted:
        console.print(f"Reset {','.join(resetted)}")
    else:
        console.print("Nothing to reset")


@app.command()
def review(kanji: Optional[str] = typer.Argument(None, help="Kanji to mark, '-' for stdin")) -> None:
    """Manually tag kanji as reviewed."""
    literals = parse_kanji_arg(kanji)
    if literals is None:
        return

    with storage_session() as storage:
        now = local_now()
        items = [
            item
            for item in (storage.get_by_literal(k) for k in literals)
            if item is not None and item.can_be_reviewed(now)
        ]
        if not items:
            console.print("Nothing to do")
            return

        reviewed = apply_reviews(storage, items, read_failed_input())

    console.print(f"Reviewed {','.join(reviewed)}")


# =============================================================================
# Info Commands
# =============================================================================


@app.command()
def info() -> None:
    """Show info about reviews."""
    settings = get_settings()
    limit = settings.display_limit

    with storage_session() as storage:
        now = local_now()
        selector = storage.selector

        sections = [
            ("Next", storage.resolve(selector.new())),
            ("Today", storage.resolve(selector.due(now))),
            ("Tomorrow", storage.resolve(selector.due_tomorrow(now))),
            ("Future", storage.resolve(selector.future(now, settings.future_limit))),
        ]
        for title, items in sections:
            if items:
                console.print(f"[bold]{title}:[/bold]")
                console.print(format_review_day(items, limit))
                console.print()

        if storage.is_empty():
            console.print("No kanji in database. Go and add some")


@app.command()
def stats() -> None:
    """Show stats."""
    settings = get_settings()
    with storage_session() as storage:
        summary = StorageStats.from_storage(storage, settings.new_count)

    console.print(build_stats_table(summary))


@app.command("all")
def list_all(raw: bool = typer.Option(False, "--raw", help="Print without separators")) -> None:
    """List all kanji."""
    with storage_session() as storage:
        literals = [i.literal for i in storage]

    console.print(("" if raw else ",").join(literals))


@app.command("fix-db")
def fix_db() -> None:
    """Fix database."""
    with storage_session() as storage:
        if storage.check():
            console.print("[green]✓[/green] Database is consistent")
            return

        console.print("[yellow]Database broken[/yellow]")
        if not Confirm.ask("Do you want to repair it?", default=True):
            return

        console.print("Trying to repair database")
        if storage.repair():
            console.print("[green]✓[/green] Success")
        else:
            console.print("[red]✗[/red] Couldn't fix database")


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
