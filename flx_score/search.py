from __future__ import annotations

from dataclasses import dataclass

from flx_score.bonus import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    case_bonus,
    compute_heatmap,
    full_match_bonus,
    run_bonus,
)
from flx_score.chars import fold
from flx_score.index import CandidateIndex, build_index, positions_after
from flx_score.models import ScoreResult


@dataclass(frozen=True)
class Alignment:
    score: int
    indices: tuple[int, ...]
    # Contiguous matches directly following the first index.
    run: int = 0


@dataclass(frozen=True)
class _Step:
    score: int
    run: int
    # (next position, run key) of the rest of the alignment.
    link: tuple[int, int] | None = None


# query index -> candidate position -> capped run -> best step
MatchTable = list[dict[int, dict[int, _Step]]]


def is_subsequence(candidate: str, query: str) -> bool:
    """Return whether *query* occurs in order in *candidate*, ignoring case."""
    if not query:
        return True
    folded_query = [fold(ch) for ch in query]
    cursor = 0
    for ch in candidate:
        if fold(ch) == folded_query[cursor]:
            cursor += 1
            if cursor == len(folded_query):
                return True
    return False


def _follow_links(table: MatchTable, position: int, key: int) -> tuple[int, ...]:
    indices = [position]
    link = table[0][position][key].link
    for row in table[1:]:
        if link is None:
            break
        position, key = link
        indices.append(position)
        link = row[position][key].link
    return tuple(indices)


def find_best_match(
    candidate: str,
    query: str,
    index: CandidateIndex,
    heatmap: list[int],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Alignment | None:
    """Return the highest scoring alignment of *query* in *candidate*.

    The table is filled from the last query character backwards.  The run
    bonus of a match depends on how far the run continues after it, so each
    state keeps its best step per capped run length; that keeps the result
    globally optimal instead of greedy.  Steps only link to their successor
    and the indices are collected once at the end.
    """
    if not query:
        return None

    query_length = len(query)
    candidate_length = len(candidate)
    folded_query = [fold(ch) for ch in query]
    table: MatchTable = [{} for _ in range(query_length)]

    for query_index in reversed(range(query_length)):
        # Later positions leave no room for the rest of the query.
        latest = candidate_length - (query_length - query_index)
        query_char = query[query_index]
        is_last = query_index == query_length - 1
        next_positions = (
            [] if is_last else index.get(folded_query[query_index + 1], [])
        )
        row = table[query_index]

        for position in index.get(folded_query[query_index], []):
            if position > latest:
                break
            gain = heatmap[position] + case_bonus(
                candidate[position], query_char, weights
            )
            if is_last:
                row[position] = {0: _Step(gain, 0)}
                continue

            options: dict[int, _Step] = {}
            for next_position in positions_after(next_positions, position):
                follow = table[query_index + 1].get(next_position)
                if follow is None:
                    break
                adjacent = next_position == position + 1
                for child_key, child in follow.items():
                    if adjacent:
                        total = child.score + gain + run_bonus(child.run, weights)
                        run = child.run + 1
                    else:
                        total = child.score + gain
                        run = 0
                    key = min(run, weights.run_bonus_cap)
                    best = options.get(key)
                    if best is None or total > best.score:
                        options[key] = _Step(total, run, (next_position, child_key))
            if options:
                row[position] = options

    best_start: tuple[int, int] | None = None
    best_step: _Step | None = None
    for position, options in table[0].items():
        for key, step in options.items():
            if best_step is None or step.score > best_step.score:
                best_start = (position, key)
                best_step = step
    if best_start is None or best_step is None:
        return None
    return Alignment(best_step.score, _follow_links(table, *best_start), best_step.run)


class Scorer:
    """Score queries against one candidate, reusing its index and heatmap."""

    def __init__(
        self,
        candidate: str,
        *,
        group_separator: str | None = None,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
    ) -> None:
        self.candidate = candidate
        self.group_separator = group_separator
        self.weights = weights
        self._index: CandidateIndex | None = None
        self._heatmap: list[int] | None = None

    @property
    def index(self) -> CandidateIndex:
        if self._index is None:
            self._index = build_index(self.candidate)
        return self._index

    @property
    def heatmap(self) -> list[int]:
        if self._heatmap is None:
            self._heatmap = compute_heatmap(
                self.candidate, self.group_separator, self.weights
            )
        return self._heatmap

    def score(self, query: str) -> ScoreResult | None:
        if not query:
            return ScoreResult(score=0, matched_indices=())
        if not is_subsequence(self.candidate, query):
            return None

        alignment = find_best_match(
            self.candidate, query, self.index, self.heatmap, self.weights
        )
        if alignment is None:
            return None

        total = alignment.score + full_match_bonus(
            len(query), len(self.candidate), self.weights
        )
        return ScoreResult(score=max(0, total), matched_indices=alignment.indices)


def score(
    candidate: str,
    query: str,
    *,
    group_separator: str | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> ScoreResult | None:
    """Score *query* against *candidate*; ``None`` means no match.

    An empty query matches everything with a score of zero.
    """
    scorer = Scorer(candidate, group_separator=group_separator, weights=weights)
    return scorer.score(query)
