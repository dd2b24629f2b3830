from __future__ import annotations

from dataclasses import dataclass, field

from flx_score.chars import classify, is_boundary, is_word


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable constants of the scoring model.

    The defaults reproduce the ``flx`` scorer used by Emacs completion
    frameworks, e.g. ``switch-to-buffer`` scores 237 against ``stb``.
    """

    default_score: int = -35
    last_char_bonus: int = 1
    word_start_bonus: int = 85
    basepath_bonus: int = 35
    word_order_penalty: int = 3
    char_order_penalty: int = 1
    extension_penalty: int = 45
    group_count_penalty: int = 2
    non_basepath_penalty: int = 5
    last_group_penalty: int = 3
    adjacent_match_bonus: int = 60
    run_length_bonus: int = 15
    run_bonus_cap: int = 3
    case_match_bonus: int = 15
    full_match_boost: int = 10000
    full_match_min_query: int = 2
    full_match_max_query: int = 4

    def __post_init__(self) -> None:
        if self.run_bonus_cap < 0:
            raise ValueError("run_bonus_cap must not be negative.")
        if self.full_match_min_query > self.full_match_max_query:
            raise ValueError(
                "full_match_min_query must not exceed full_match_max_query."
            )


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass
class _Group:
    start: int
    word_count: int = 0
    # Word start positions, latest first.
    words: list[int] = field(default_factory=list)


def _split_groups(
    candidate: str,
    scores: list[int],
    group_separator: str | None,
    weights: ScoringWeights,
) -> list[_Group]:
    # Groups are collected latest first, the leftmost one starts at -1.
    groups = [_Group(start=-1)]
    last_index = len(candidate) - 1
    last_char: str | None = None
    group_word_count = 0

    for index, ch in enumerate(candidate):
        # Until a group has a word, leading separators count as words of
        # their own, so "foo/__ab" ranks below "foo/ab".
        effective_last = last_char if group_word_count else None
        if is_boundary(effective_last, ch):
            groups[0].words.insert(0, index)

        if not is_word(last_char) and is_word(ch):
            group_word_count += 1

        if last_char == ".":
            scores[index] -= weights.extension_penalty

        if group_separator is not None and ch == group_separator:
            groups[0].word_count = group_word_count
            group_word_count = 0
            groups.insert(0, _Group(start=index))

        if index == last_index:
            groups[0].word_count = group_word_count
        else:
            last_char = ch

    return groups


def compute_heatmap(
    candidate: str,
    group_separator: str | None = None,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[int]:
    """Return the base score of matching each position of *candidate*.

    Word starts get a large bonus and every character further into a word
    costs a little more, so skipping ahead inside a word is penalized by the
    distance skipped.  With a *group_separator* (``/`` for paths) the last
    group holding words, the basepath, is boosted over its parents.
    """
    if not candidate:
        return []

    length = len(candidate)
    scores = [weights.default_score] * length
    scores[-1] += weights.last_char_bonus

    groups = _split_groups(candidate, scores, group_separator, weights)
    separator_count = len(groups) - 1
    if separator_count:
        penalty = len(groups) * weights.group_count_penalty
        scores[:] = [value - penalty for value in scores]

    group_index = separator_count
    last_group_limit: int | None = None
    basepath_found = False

    for group in groups:
        is_basepath = bool(group.words) and not basepath_found
        if is_basepath:
            basepath_found = True
            boosts = separator_count - 1 if separator_count > 1 else 0
            offset = weights.basepath_bonus + boosts - group.word_count
        elif group_index == 0:
            offset = -weights.last_group_penalty
        else:
            offset = -weights.non_basepath_penalty + (group_index - 1)

        limit = length if last_group_limit is None else last_group_limit
        for index in range(group.start + 1, limit):
            scores[index] += offset

        word_index = len(group.words) - 1
        last_word = limit
        for word in group.words:
            scores[word] += weights.word_start_bonus
            for char_index, index in enumerate(range(word, last_word)):
                scores[index] -= (
                    weights.word_order_penalty * word_index
                    + weights.char_order_penalty * char_index
                )
            last_word = word
            word_index -= 1

        last_group_limit = group.start + 1
        group_index -= 1

    return scores


def run_bonus(following_run: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    """Bonus for a match directly followed by the next one.

    *following_run* counts the contiguous matches after that next one.
    """
    counted = min(following_run, weights.run_bonus_cap)
    return weights.adjacent_match_bonus + weights.run_length_bonus * counted


def case_bonus(
    candidate_char: str,
    query_char: str,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Bonus for an uppercase query character typed in the candidate's case.

    Only uppercase query characters earn it.  Lowercase ones match either
    case without preference, so lowercase queries keep the plain flx scores.
    """
    if classify(query_char).is_upper and candidate_char == query_char:
        return weights.case_match_bonus
    return 0


def full_match_bonus(
    query_length: int,
    candidate_length: int,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    in_range = (
        weights.full_match_min_query <= query_length <= weights.full_match_max_query
    )
    if in_range and query_length == candidate_length:
        return weights.full_match_boost
    return 0
