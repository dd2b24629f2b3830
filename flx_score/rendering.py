from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text

from flx_score.models import RankedCandidate

MATCH_STYLE = "bold magenta"
SCORE_STYLE = "dim"


def highlight_match(
    candidate: str,
    indices: Iterable[int],
    *,
    style: str = MATCH_STYLE,
) -> Text:
    text = Text(candidate)
    for index in indices:
        if 0 <= index < len(candidate):
            text.stylize(style, index, index + 1)
    return text


def format_score(value: int, width: int) -> str:
    return f"{value:>{width}}"


def format_ranked_line(
    ranked: RankedCandidate,
    *,
    show_score: bool = False,
    score_width: int = 0,
    style: str | None = MATCH_STYLE,
) -> Text:
    if style is None:
        line = Text(ranked.candidate)
    else:
        line = highlight_match(
            ranked.candidate, ranked.result.matched_indices, style=style
        )
    if not show_score:
        return line
    return Text.assemble(
        (format_score(ranked.score, score_width), SCORE_STYLE), " ", line
    )


def score_column_width(ranked: Iterable[RankedCandidate]) -> int:
    return max((len(str(item.score)) for item in ranked), default=0)
