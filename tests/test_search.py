import random
from itertools import combinations

import pytest

from flx_score import ScoreResult, Scorer, score
from flx_score.bonus import DEFAULT_WEIGHTS, case_bonus, compute_heatmap, run_bonus
from flx_score.index import build_index
from flx_score.search import find_best_match, is_subsequence


def _alignment_score(heatmap: list[int], indices: tuple[int, ...]) -> int:
    total = 0
    run = 0
    for position in reversed(range(len(indices))):
        total += heatmap[indices[position]]
        is_adjacent = (
            position + 1 < len(indices)
            and indices[position + 1] == indices[position] + 1
        )
        if is_adjacent:
            total += run_bonus(run)
            run += 1
        else:
            run = 0
    return total


def _total_score(
    candidate: str, query: str, heatmap: list[int], indices: tuple[int, ...]
) -> int:
    bonus = sum(
        case_bonus(candidate[index], char) for index, char in zip(indices, query)
    )
    return _alignment_score(heatmap, indices) + bonus


def _brute_force_best(
    candidate: str, query: str, group_separator: str | None = None
) -> int:
    heatmap = compute_heatmap(candidate, group_separator)
    best: int | None = None
    for indices in combinations(range(len(candidate)), len(query)):
        if all(
            candidate[index].lower() == char.lower()
            for index, char in zip(indices, query)
        ):
            value = _total_score(candidate, query, heatmap, indices)
            if best is None or value > best:
                best = value
    assert best is not None
    return best


def test_score_reproduces_flx_reference_example() -> None:
    result = score("switch-to-buffer", "stb")

    assert result == ScoreResult(score=237, matched_indices=(0, 7, 10))


def test_score_returns_none_without_subsequence() -> None:
    assert score("abc", "xyz") is None
    assert score("abc", "cab") is None
    assert score("", "a") is None


def test_score_matches_case_insensitively() -> None:
    result = score("AbC", "abc")

    assert result is not None
    assert result.matched_indices == (0, 1, 2)


@pytest.mark.parametrize("candidate", ["", "a", "switch-to-buffer"])
def test_empty_query_matches_with_zero_score(candidate: str) -> None:
    assert score(candidate, "") == ScoreResult(score=0, matched_indices=())


@pytest.mark.parametrize(
    ("candidate", "query"),
    [
        ("switch-to-buffer", "sbf"),
        ("src/flx_score/search.py", "fss"),
        ("FooBarBaz", "fbb"),
        ("aaaaaa", "aaa"),
        ("Makefile", "MF"),
        ("a_b_ab", "ab"),
    ],
)
def test_matched_indices_form_a_valid_alignment(candidate: str, query: str) -> None:
    result = score(candidate, query)

    assert result is not None
    indices = result.matched_indices
    assert len(indices) == len(query)
    assert list(indices) == sorted(set(indices))
    for index, char in zip(indices, query):
        assert candidate[index].lower() == char.lower()
    assert result.score >= 0


@pytest.mark.parametrize(
    ("candidate", "query"),
    [
        ("foo_bar_foobar", "fb"),
        ("foo_bar_foobar", "oba"),
        ("xaxbxabxab", "ab"),
        ("abcabcabc", "abc"),
        ("switch-to-buffer", "tbuf"),
        ("a_b_ab", "ab"),
        ("find-file-other-window", "ffow"),
    ],
)
def test_search_finds_the_global_optimum(candidate: str, query: str) -> None:
    alignment = find_best_match(
        candidate, query, build_index(candidate), compute_heatmap(candidate)
    )

    assert alignment is not None
    assert alignment.score == _brute_force_best(candidate, query)


def test_find_best_match_returns_none_when_no_alignment_exists() -> None:
    heatmap = compute_heatmap("abc")

    assert find_best_match("abc", "ca", build_index("abc"), heatmap) is None


def test_contiguous_match_outscores_scattered_match() -> None:
    contiguous = score("abcxyz", "abc")
    scattered = score("axbycz", "abc")

    assert contiguous is not None and scattered is not None
    assert contiguous.score == 214
    assert scattered.score == 76
    assert contiguous.score > scattered.score


def test_contiguous_word_start_run_preferred_over_mid_word_scatter() -> None:
    result = score("xbxuxf_buf", "buf")

    assert result is not None
    assert result.matched_indices == (7, 8, 9)
    assert result.score == 203


def test_word_boundary_match_outscores_mid_word_match() -> None:
    boundary = score("foo-bar", "b")
    mid_word = score("foobar", "b")

    assert boundary is not None and mid_word is not None
    assert boundary.score > mid_word.score


def test_exact_case_scores_at_least_case_flip() -> None:
    exact = score("FooBar", "B")
    flipped = score("FooBar", "b")

    assert exact is not None and flipped is not None
    assert exact.score >= flipped.score
    assert exact.score - flipped.score == DEFAULT_WEIGHTS.case_match_bonus


def test_full_match_boost_for_short_queries() -> None:
    boosted = score("ab", "ab")
    long_query = score("abcde", "abcde")

    assert boosted is not None and long_query is not None
    assert boosted.score > 10000
    assert long_query.score < 10000


def test_poor_match_is_clamped_to_zero_not_dropped() -> None:
    result = score("abcdefghijklmnopqrstuvwxyz", "z")

    assert result == ScoreResult(score=0, matched_indices=(25,))


def test_group_separator_prefers_basepath_matches() -> None:
    in_basepath = score("foo/bar.py", "b", group_separator="/")
    in_directory = score("bar/foo.py", "b", group_separator="/")

    assert in_basepath is not None and in_directory is not None
    assert in_basepath.score > in_directory.score


def test_score_is_deterministic() -> None:
    results = {score("aXaXaXa_aa", "aa") for _ in range(5)}

    assert len(results) == 1


def test_is_subsequence() -> None:
    assert is_subsequence("switch-to-buffer", "STB")
    assert is_subsequence("", "")
    assert is_subsequence("abc", "")
    assert not is_subsequence("abc", "abcd")
    assert not is_subsequence("abc", "ba")


def test_scorer_reuses_index_and_heatmap_across_queries() -> None:
    scorer = Scorer("switch-to-buffer")

    assert scorer.score("stb") == score("switch-to-buffer", "stb")
    index = scorer.index
    heatmap = scorer.heatmap
    assert scorer.score("buf") == score("switch-to-buffer", "buf")
    assert scorer.index is index
    assert scorer.heatmap is heatmap


@pytest.mark.parametrize("seed", range(20))
def test_search_finds_the_global_optimum_with_case_and_groups(seed: int) -> None:
    rng = random.Random(seed)
    for _ in range(25):
        length = rng.randint(1, 10)
        candidate = "".join(rng.choice("aAbB/_-.") for _ in range(length))
        size = rng.randint(1, min(3, length))
        positions = sorted(rng.sample(range(length), size))
        query = "".join(
            rng.choice([candidate[position].lower(), candidate[position].upper()])
            for position in positions
        )
        heatmap = compute_heatmap(candidate, "/")

        alignment = find_best_match(candidate, query, build_index(candidate), heatmap)

        assert alignment is not None
        assert alignment.score == _brute_force_best(candidate, query, "/")
        assert alignment.score == _total_score(
            candidate, query, heatmap, alignment.indices
        )


def test_long_repetitive_candidate_returns_leading_run() -> None:
    result = score("a" * 300, "a" * 8)

    assert result is not None
    assert result.matched_indices == tuple(range(8))


def test_alignment_indices_reproduce_their_score() -> None:
    candidate = "src/flx_score/search_search.py"
    query = "ssea"
    heatmap = compute_heatmap(candidate, "/")

    alignment = find_best_match(candidate, query, build_index(candidate), heatmap)

    assert alignment is not None
    assert len(alignment.indices) == len(query)
    assert alignment.score == _total_score(candidate, query, heatmap, alignment.indices)


def test_matches_below_zero_tie_at_zero() -> None:
    contiguous_candidate = "x" * 60 + "abc"
    scattered_candidate = "x" * 60 + "axbxc"

    assert score(contiguous_candidate, "abc") == ScoreResult(
        score=0, matched_indices=(60, 61, 62)
    )
    assert score(scattered_candidate, "abc") == ScoreResult(
        score=0, matched_indices=(60, 62, 64)
    )

    contiguous = find_best_match(
        contiguous_candidate,
        "abc",
        build_index(contiguous_candidate),
        compute_heatmap(contiguous_candidate),
    )
    scattered = find_best_match(
        scattered_candidate,
        "abc",
        build_index(scattered_candidate),
        compute_heatmap(scattered_candidate),
    )
    assert contiguous is not None and scattered is not None
    assert contiguous.score == -50
    assert scattered.score < contiguous.score < 0
