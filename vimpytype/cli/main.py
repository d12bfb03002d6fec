"""
VimpyType CLI - Modal editor navigation trainer for the terminal.

Usage:
    vimpytype modes                    # List difficulties and key sets
    vimpytype lesson -d medium         # Guided lesson
    vimpytype drill -d hard            # Random scored drill
    vimpytype challenge                # Multi-key challenges

Input is typed one line at a time. Each line is split into key tokens using
sequence notation: plain characters are keys, <Esc>, <BS>, <Enter>, <Space>
and <C-d> are named keys. An empty line presses space (advance in lessons).
Type :quit to leave.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.text import Text

from vimpytype.app import TrainerApp
from vimpytype.config import Settings, get_settings
from vimpytype.core.difficulty import KEY_SETS, Difficulty
from vimpytype.core.keys import ADVANCE, parse_sequence
from vimpytype.core.scheduling import AsyncioScheduler
from vimpytype.cli.render import THEME, render_key_sets, render_session
from vimpytype.training.challenge import ChallengeSession
from vimpytype.training.events import (
    ScoreChanged,
    SessionCompleted,
    SessionEvent,
    SessionKind,
)

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="vimpytype",
    help="VimpyType - learn modal editor motions in the terminal",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

QUIT_COMMANDS = {":quit", ":exit"}

DifficultyOption = Annotated[
    Difficulty | None,
    typer.Option("--difficulty", "-d", help="Key set to train (default from settings)"),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level for stderr (DEBUG, INFO, ...)"),
]


def _configure_logging(settings: Settings, level: str | None = None) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if settings.log_file:
        logger.add(settings.log_file, level="DEBUG", rotation="1 MB")


def _print_event(event: SessionEvent) -> None:
    if isinstance(event, ScoreChanged) and event.delta:
        colour = THEME["success"] if event.delta > 0 else THEME["error"]
        console.print(Text(f"{event.delta:+d}", style=colour))
    elif isinstance(event, SessionCompleted):
        console.print(f"[bold {THEME['success']}]{event.message}[/]")


async def _run_session(kind: SessionKind, settings: Settings, difficulty: Difficulty) -> int:
    """Drive one session until the learner quits. Returns the final score."""
    trainer = TrainerApp(AsyncioScheduler(), settings)
    trainer.set_difficulty(difficulty)
    trainer.subscribe(_print_event)
    trainer.start(kind)
    score = 0

    while trainer.session is not None:
        session = trainer.session
        score = session.score
        console.print(render_session(session, trainer.key_set))

        if isinstance(session, ChallengeSession) and session.finished:
            break

        try:
            line = await asyncio.to_thread(console.input, "[dim]keys>[/dim] ")
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip() in QUIT_COMMANDS:
            break

        tokens = parse_sequence(line) if line else (ADVANCE,)
        for token in tokens:
            trainer.handle_token(token)

        # Let a confirmation pause run out so the next step is rendered
        current = trainer.session
        while current is not None and current.pausing:
            await asyncio.sleep(current.pause_remaining_ms() / 1000 + 0.01)

    if trainer.session is not None:
        score = trainer.session.score
    trainer.stop_session()
    return score


def _run(kind: SessionKind, difficulty: Difficulty | None, log_level: str | None) -> None:
    settings = get_settings()
    _configure_logging(settings, log_level)
    chosen = difficulty or settings.difficulty
    try:
        score = asyncio.run(_run_session(kind, settings, chosen))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e
    console.print(f"[bold]Final score:[/bold] {score}")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def modes() -> None:
    """List difficulties and the keys each one trains."""
    console.print(render_key_sets(KEY_SETS))


@app.command()
def lesson(difficulty: DifficultyOption = None, log_level: LogLevelOption = None) -> None:
    """
    Guided lesson: one key per step.

    Press the key shown, then an empty line (space) to continue.
    """
    _run(SessionKind.LESSON, difficulty, log_level)


@app.command()
def drill(difficulty: DifficultyOption = None, log_level: LogLevelOption = None) -> None:
    """Random keys from the difficulty's key set. Hits score, misses cost."""
    _run(SessionKind.DRILL, difficulty, log_level)


@app.command()
def challenge(log_level: LogLevelOption = None) -> None:
    """Multi-key challenges with accepted alternatives."""
    _run(SessionKind.CHALLENGE, None, log_level)


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    app()
