from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from flx_score import __version__
from flx_score.ranking import rank_candidates
from flx_score.rendering import (
    MATCH_STYLE,
    format_ranked_line,
    score_column_width,
)
from flx_score.tui import FuzzyPickerApp

__all__ = [
    "FuzzyPickerApp",
    "cli",
    "run",
]

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"flx-score {__version__}")
    raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_candidates(input_file: Path | None) -> list[str]:
    if input_file is not None:
        try:
            text = input_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            typer.echo(f"Cannot read candidates from {input_file}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        source = str(input_file)
    else:
        stdin = typer.get_text_stream("stdin")
        if stdin.isatty():
            typer.echo(
                "No candidates given. Pipe them on stdin or pass --input.", err=True
            )
            raise typer.Exit(code=1)
        text = stdin.read()
        source = "stdin"

    candidates = [line for line in text.splitlines() if line]
    logger.debug("Read %d candidates from %s", len(candidates), source)
    return candidates


cli = typer.Typer(
    add_completion=False,
    help="Rank candidate strings against a fuzzy abbreviation, flx style.",
)


@cli.command()
def run(
    query: str = typer.Argument(
        "",
        help="Abbreviation to match. An empty query keeps every candidate.",
    ),
    input_file: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="File with one candidate per line. Defaults to stdin.",
    ),
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Print at most this many candidates.",
    ),
    group_separator: str | None = typer.Option(
        None,
        "--group-separator",
        "-g",
        help="Character splitting candidates into groups, e.g. '/' for paths.",
    ),
    show_scores: bool = typer.Option(
        False,
        "--scores",
        "-s",
        help="Prefix every candidate with its score.",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Do not highlight matched characters.",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        help="Pick a candidate in a terminal UI and print it.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug messages to stderr.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _configure_logging(verbose)

    if group_separator is not None and len(group_separator) != 1:
        typer.echo("--group-separator must be a single character.", err=True)
        raise typer.Exit(code=1)

    if interactive and input_file is None:
        typer.echo("--interactive reads candidates from --input only.", err=True)
        raise typer.Exit(code=1)

    candidates = _read_candidates(input_file)

    if interactive:
        selection = FuzzyPickerApp(
            candidates,
            initial_query=query,
            group_separator=group_separator,
            limit=limit,
        ).run()
        if selection is None:
            raise typer.Exit(code=1)
        typer.echo(selection)
        return

    ranked = rank_candidates(
        query,
        candidates,
        limit=limit,
        group_separator=group_separator,
    )
    if not ranked:
        raise typer.Exit(code=1)

    console = Console(highlight=False, soft_wrap=True)
    width = score_column_width(ranked)
    for item in ranked:
        console.print(
            format_ranked_line(
                item,
                show_score=show_scores,
                score_width=width,
                style=None if plain else MATCH_STYLE,
            )
        )


if __name__ == "__main__":
    cli()
