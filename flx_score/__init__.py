from __future__ import annotations

from flx_score.bonus import DEFAULT_WEIGHTS, ScoringWeights, compute_heatmap
from flx_score.models import RankedCandidate, ScoreResult
from flx_score.ranking import rank_candidates
from flx_score.rendering import highlight_match
from flx_score.search import Scorer, score

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_WEIGHTS",
    "RankedCandidate",
    "ScoreResult",
    "Scorer",
    "ScoringWeights",
    "__version__",
    "compute_heatmap",
    "highlight_match",
    "rank_candidates",
    "score",
]
