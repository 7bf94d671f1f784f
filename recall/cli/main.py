"""
Recall CLI - Inspect and exercise the scheduling engine from the terminal.

Usage:
    recall simulate good good good   # Replay grades on a fresh card
    recall grade 12500               # Suggest a grade for a 12.5s answer
    recall grade 4000 --wrong        # Wrong answers are always Again
    recall describe 45               # "1mo"
    recall show-config               # Effective scheduler configuration
"""

from __future__ import annotations

import sys
from datetime import UTC, datetime
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import get_settings
from recall.core.config import SchedulerConfig
from recall.core.errors import SchedulerError
from recall.core.models import CardRecord, CardState, Quality
from recall.study.due import get_interval_description
from recall.study.grading import suggest_grade_from_time
from recall.study.mastery import classify_mastery
from recall.study.scheduler import CardScheduler

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="recall",
    help="Recall - spaced repetition scheduling engine",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

STATE_COLORS = {
    CardState.NEW: "dim",
    CardState.LEARNING: "yellow",
    CardState.REVIEW: "green",
    CardState.RELEARNING: "magenta",
    CardState.SUSPENDED: "red",
}


def configure_logging(level: str, log_file: str | None = None) -> None:
    """Route loguru output to stderr (and optionally a file)."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB")


def load_scheduler_config() -> SchedulerConfig:
    """Build the scheduler config from settings, exiting on invalid values."""
    try:
        return get_settings().get_scheduler_config()
    except SchedulerError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(1)


def parse_grade(value: str) -> Quality:
    """Accept a grade name (again/hard/good/easy) or number (0-3)."""
    token = value.strip().lower()
    if token.isdigit():
        number = int(token)
        if number in {q.value for q in Quality}:
            return Quality(number)
    elif token.upper() in Quality.__members__:
        return Quality[token.upper()]
    raise typer.BadParameter(f"Unknown grade '{value}' (use again/hard/good/easy or 0-3)")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def simulate(
    grades: Annotated[
        list[str], typer.Argument(help="Grades to apply in order (again/hard/good/easy or 0-3)")
    ],
) -> None:
    """
    Replay a sequence of grades on a fresh card.

    The simulated clock jumps to each scheduled review before the next
    answer, so every answer is given exactly on time.

    Examples:
        recall simulate good good good
        recall simulate easy again good
    """
    qualities = [parse_grade(g) for g in grades]
    config = load_scheduler_config()

    now = datetime.now(UTC)
    scheduler = CardScheduler(config=config, clock=lambda: now)
    card = CardRecord.new("simulated", ease_factor=config.starting_ease_factor)

    table = Table(title="Simulated Reviews")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Grade", style="cyan")
    table.add_column("Transition")
    table.add_column("Interval", justify="right")
    table.add_column("Ease", justify="right")
    table.add_column("Rules", style="dim")

    for index, quality in enumerate(qualities, start=1):
        try:
            card, result = scheduler.schedule(card, quality, now=now)
        except SchedulerError as e:
            console.print(table)
            console.print(f"[red]Step {index} rejected: {e}[/]")
            raise typer.Exit(1)

        from_color = STATE_COLORS[result.from_state]
        to_color = STATE_COLORS[result.to_state]
        table.add_row(
            str(index),
            quality.label,
            f"[{from_color}]{result.from_state.value}[/] → [{to_color}]{result.to_state.value}[/]",
            get_interval_description(result.next_interval),
            f"{result.ease_factor:.2f}",
            ", ".join(tag.value for tag in result.applied_rules),
        )
        now = result.next_review

    console.print(table)

    level = classify_mastery(card)
    console.print(
        Panel(
            f"State: [bold]{card.state.value}[/]\n"
            f"Repetitions: {card.repetitions}  Lapses: {card.lapses}\n"
            f"Answered: {card.times_answered}  Correct: {card.times_correct}\n"
            f"Mastery: [{level.color}]{level.emoji} {level.display_name}[/]",
            title="Final Card",
            border_style="cyan",
        )
    )


@app.command()
def grade(
    response_ms: Annotated[int, typer.Argument(help="Response time in milliseconds", min=0)],
    wrong: Annotated[
        bool, typer.Option("--wrong", "-w", help="The answer was incorrect")
    ] = False,
) -> None:
    """Suggest a grade from response time and correctness."""
    thresholds = load_scheduler_config().grading
    quality = suggest_grade_from_time(response_ms, not wrong, thresholds)
    console.print(f"[bold]{quality.label}[/] ({quality.value})")


@app.command()
def describe(
    days: Annotated[float, typer.Argument(help="Interval in days")],
) -> None:
    """Format an interval the way review buttons show it."""
    if days <= 0:
        console.print(f"[red]Interval must be positive, got {days}[/]")
        raise typer.Exit(1)
    console.print(get_interval_description(days))


@app.command("show-config")
def show_config() -> None:
    """Show the effective scheduler configuration."""
    config = load_scheduler_config()

    table = Table(title="Scheduler Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for name, value in config.model_dump(exclude={"grading"}).items():
        if isinstance(value, tuple):
            value = ", ".join(f"{v:g}" for v in value)
        elif hasattr(value, "value"):
            value = value.value
        table.add_row(name, str(value))
    for name, value in config.grading.model_dump().items():
        table.add_row(f"grading.{name}", f"{value:g}s")

    console.print(table)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show scheduler debug logs")
    ] = False,
) -> None:
    """
    Recall - spaced repetition scheduling engine

    Configure with RECALL_* environment variables or a .env file.
    """
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_file)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
