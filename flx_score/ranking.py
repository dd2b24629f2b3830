from __future__ import annotations

import logging
from collections.abc import Iterable

from flx_score.bonus import DEFAULT_WEIGHTS, ScoringWeights
from flx_score.models import RankedCandidate
from flx_score.search import score

logger = logging.getLogger(__name__)


def rank_candidates(
    query: str,
    candidates: Iterable[str],
    *,
    limit: int | None = None,
    group_separator: str | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[RankedCandidate]:
    """Return the candidates matching *query*, best first.

    Equal scores keep their input order.  An empty query keeps every
    candidate in input order.
    """
    ranked: list[RankedCandidate] = []
    total = 0
    for position, candidate in enumerate(candidates):
        total += 1
        result = score(
            candidate, query, group_separator=group_separator, weights=weights
        )
        if result is not None:
            ranked.append(RankedCandidate(candidate, result, position))

    ranked.sort(key=lambda item: (-item.score, item.position))
    logger.debug("Query %r matched %d of %d candidates", query, len(ranked), total)
    if limit is not None:
        return ranked[: max(0, limit)]
    return ranked
