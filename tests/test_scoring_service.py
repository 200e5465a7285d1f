"""Tests for the heuristic scoring engine."""

from __future__ import annotations

import pytest

from variant_compare.errors import InvalidInput
from variant_compare.models.comparison_model import Confidence, Factor, Winner
from variant_compare.models.image_model import Dimensions, ImageFormat
from variant_compare.services.scoring_service import (
    FACTOR_WEIGHTS,
    MAX_TOTAL_SCORE,
    ScoringEngine,
    aspect_score,
    format_score,
    recommend,
)


def _winners(result) -> dict:
    return {factor.factor: factor.winner for factor in result.factors}


def test_smaller_file_wins_with_high_confidence(make_metadata) -> None:
    a = make_metadata(size=100_000, width=1920, height=1080, fmt="jpg")
    b = make_metadata(size=150_000, width=1920, height=1080, fmt="jpg")

    result = ScoringEngine().score(a, b)

    assert _winners(result) == {
        Factor.FILE_SIZE: Winner.A,
        Factor.ASPECT_RATIO: Winner.TIE,
        Factor.RESOLUTION: Winner.TIE,
        Factor.FORMAT: Winner.TIE,
    }
    assert (result.score_a, result.score_b) == (2, 0)
    assert result.recommendation.winner is Winner.A
    assert result.recommendation.confidence is Confidence.HIGH


def test_better_format_wins_with_medium_confidence(make_metadata) -> None:
    a = make_metadata(size=100_000, width=800, height=600, fmt="png")
    b = make_metadata(size=100_000, width=800, height=600, fmt="webp")

    result = ScoringEngine().score(a, b)

    assert _winners(result) == {
        Factor.FILE_SIZE: Winner.TIE,
        Factor.ASPECT_RATIO: Winner.TIE,
        Factor.RESOLUTION: Winner.TIE,
        Factor.FORMAT: Winner.B,
    }
    assert (result.score_a, result.score_b) == (0, 1)
    assert result.recommendation.winner is Winner.B
    assert result.recommendation.confidence is Confidence.MEDIUM


def test_factors_follow_fixed_order(make_metadata) -> None:
    result = ScoringEngine().score(make_metadata(), make_metadata())
    assert [f.factor for f in result.factors] == [
        Factor.FILE_SIZE,
        Factor.ASPECT_RATIO,
        Factor.RESOLUTION,
        Factor.FORMAT,
    ]


def test_identical_variants_tie_with_equal_confidence(make_metadata) -> None:
    result = ScoringEngine().score(make_metadata(), make_metadata())
    assert (result.score_a, result.score_b) == (0, 0)
    assert result.recommendation.winner is Winner.TIE
    assert result.recommendation.confidence is Confidence.EQUAL


def test_equal_sizes_are_a_tie(make_metadata) -> None:
    result = ScoringEngine().score(make_metadata(size=5), make_metadata(size=5))
    assert result.factors[0].winner is Winner.TIE


def test_golden_ratio_exact_scores_highest() -> None:
    assert aspect_score(Dimensions(1618, 1000)) == 3


def test_aspect_score_levels() -> None:
    assert aspect_score(Dimensions(1920, 1080)) == 2
    assert aspect_score(Dimensions(800, 600)) == 2
    assert aspect_score(Dimensions(600, 400)) == 2
    assert aspect_score(Dimensions(500, 500)) == 2
    assert aspect_score(Dimensions(1000, 100)) == 1
    assert aspect_score(Dimensions(100, 1000)) == 1


def test_golden_ratio_beats_common_ratio(make_metadata) -> None:
    a = make_metadata(width=1618, height=1000)
    b = make_metadata(width=1600, height=900)
    result = ScoringEngine().score(a, b)
    assert _winners(result)[Factor.ASPECT_RATIO] is Winner.A


def test_resolution_needs_strictly_more_than_twenty_percent(make_metadata) -> None:
    engine = ScoringEngine()
    exact = engine.score(make_metadata(width=1200, height=1), make_metadata(width=1000, height=1))
    above = engine.score(make_metadata(width=1201, height=1), make_metadata(width=1000, height=1))
    below = engine.score(make_metadata(width=1000, height=1), make_metadata(width=1201, height=1))

    assert _winners(exact)[Factor.RESOLUTION] is Winner.TIE
    assert _winners(above)[Factor.RESOLUTION] is Winner.A
    assert _winners(below)[Factor.RESOLUTION] is Winner.B


def test_format_scores() -> None:
    assert format_score(ImageFormat.WEBP) == 3
    assert format_score(ImageFormat.JPG) == format_score(ImageFormat.JPEG) == 2
    assert format_score(ImageFormat.PNG) == 1
    assert format_score(ImageFormat.GIF) == 0
    assert format_score(ImageFormat.OTHER) == 0


def test_recommendation_margins() -> None:
    assert recommend(3, 1).confidence is Confidence.HIGH
    assert recommend(2, 1).confidence is Confidence.MEDIUM
    assert recommend(1, 2).winner is Winner.B
    assert recommend(4, 4).winner is Winner.TIE


PAIRS = [
    (dict(size=10, width=1920, height=1080, fmt="png"), dict(size=20, width=800, height=600, fmt="webp")),
    (dict(size=500, width=1618, height=1000, fmt="jpeg"), dict(size=400, width=300, height=1000, fmt="gif")),
    (dict(size=7, width=4000, height=3000, fmt="jpg"), dict(size=7, width=100, height=100, fmt="png")),
    (dict(size=1, width=1, height=1, fmt="webp"), dict(size=0, width=2, height=1, fmt="other")),
]


@pytest.mark.parametrize(("left", "right"), PAIRS)
def test_scores_are_bounded_and_match_won_weights(make_metadata, left, right) -> None:
    result = ScoringEngine().score(make_metadata(**left), make_metadata(**right))

    won_a = sum(FACTOR_WEIGHTS[f.factor] for f in result.factors if f.winner is Winner.A)
    won_b = sum(FACTOR_WEIGHTS[f.factor] for f in result.factors if f.winner is Winner.B)
    assert result.score_a == won_a
    assert result.score_b == won_b
    assert result.score_a + result.score_b <= MAX_TOTAL_SCORE == 5


@pytest.mark.parametrize(("left", "right"), PAIRS)
def test_swapping_inputs_swaps_every_winner(make_metadata, left, right) -> None:
    a = make_metadata(**left)
    b = make_metadata(**right)
    engine = ScoringEngine()

    forward = engine.score(a, b)
    backward = engine.score(b, a)

    assert [f.winner.swapped() for f in forward.factors] == [f.winner for f in backward.factors]
    assert (forward.score_a, forward.score_b) == (backward.score_b, backward.score_a)
    assert forward.recommendation.winner.swapped() is backward.recommendation.winner
    assert forward.recommendation.confidence is backward.recommendation.confidence


def test_scoring_is_idempotent(make_metadata) -> None:
    a = make_metadata(size=10, fmt="png")
    b = make_metadata(size=20, width=800, height=600)
    engine = ScoringEngine()
    assert engine.score(a, b) == engine.score(a, b)


@pytest.mark.parametrize(("width", "height"), [(0, 100), (100, 0), (-5, 10)])
def test_degenerate_dimensions_are_rejected(make_metadata, width, height) -> None:
    with pytest.raises(InvalidInput):
        ScoringEngine().score(make_metadata(width=width, height=height), make_metadata())
    with pytest.raises(InvalidInput):
        ScoringEngine().score(make_metadata(), make_metadata(width=width, height=height))


def test_negative_size_is_rejected(make_metadata) -> None:
    with pytest.raises(InvalidInput):
        ScoringEngine().score(make_metadata(size=-1), make_metadata())
