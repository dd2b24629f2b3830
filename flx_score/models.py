from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreResult:
    score: int
    matched_indices: tuple[int, ...]


@dataclass(frozen=True)
class RankedCandidate:
    candidate: str
    result: ScoreResult
    position: int

    @property
    def score(self) -> int:
        return self.result.score
