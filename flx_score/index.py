from __future__ import annotations

from bisect import bisect_right
from collections import defaultdict

from flx_score.chars import fold

CandidateIndex = dict[str, list[int]]


def build_index(candidate: str) -> CandidateIndex:
    """Map each folded character of *candidate* to its sorted positions."""
    index: defaultdict[str, list[int]] = defaultdict(list)
    for position, ch in enumerate(candidate):
        index[fold(ch)].append(position)
    return dict(index)


def positions_after(positions: list[int], bound: int | None) -> list[int]:
    if bound is None:
        return positions
    return positions[bisect_right(positions, bound) :]
