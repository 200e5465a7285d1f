"""Детерминированная оценка двух вариантов по дешёвым эвристикам.

Факторы оцениваются в фиксированном порядке: размер файла, пропорции,
разрешение, формат. Каждый фактор отдаёт свой вес ровно одной стороне
или никому при ничьей. Все сравнения строгие.
"""
from __future__ import annotations

from typing import Callable, List, Tuple

from variant_compare.errors import InvalidInput
from variant_compare.models.comparison_model import (
    ComparisonResult,
    Confidence,
    Factor,
    FactorResult,
    Recommendation,
    Winner,
)
from variant_compare.models.image_model import Dimensions, ImageFormat, ImageMetadata

FILE_SIZE_WEIGHT = 2
ASPECT_RATIO_WEIGHT = 1
RESOLUTION_WEIGHT = 1
FORMAT_WEIGHT = 1
FACTOR_WEIGHTS = {
    Factor.FILE_SIZE: FILE_SIZE_WEIGHT,
    Factor.ASPECT_RATIO: ASPECT_RATIO_WEIGHT,
    Factor.RESOLUTION: RESOLUTION_WEIGHT,
    Factor.FORMAT: FORMAT_WEIGHT,
}
MAX_TOTAL_SCORE = sum(FACTOR_WEIGHTS.values())

GOLDEN_RATIO = 1.618
GOLDEN_RATIO_TOLERANCE = 0.1
COMMON_RATIOS: Tuple[float, ...] = (16 / 9, 4 / 3, 3 / 2, 1 / 1)
COMMON_RATIO_TOLERANCE = 0.05
GOLDEN_ASPECT_SCORE = 3
COMMON_ASPECT_SCORE = 2
OTHER_ASPECT_SCORE = 1

# Во сколько раз больше пикселей нужно для победы по разрешению
RESOLUTION_ADVANTAGE = 1.2

FORMAT_SCORES = {
    ImageFormat.WEBP: 3,
    ImageFormat.JPG: 2,
    ImageFormat.JPEG: 2,
    ImageFormat.PNG: 1,
}
DEFAULT_FORMAT_SCORE = 0

# Разница баллов, начиная с которой уверенность высокая (строго больше)
HIGH_CONFIDENCE_MARGIN = 1

_REASONS = {
    Factor.FILE_SIZE: ("Меньший размер файла — быстрее загрузка", "Одинаковый размер файлов"),
    Factor.ASPECT_RATIO: ("Более удачные пропорции композиции", "Похожие пропорции"),
    Factor.RESOLUTION: ("Выше разрешение — больше деталей", "Сопоставимое разрешение"),
    Factor.FORMAT: ("Формат лучше оптимизирован для веба", "Одинаковая эффективность формата"),
}


def aspect_score(dimensions: Dimensions) -> int:
    ratio = dimensions.width / dimensions.height
    if abs(ratio - GOLDEN_RATIO) < GOLDEN_RATIO_TOLERANCE:
        return GOLDEN_ASPECT_SCORE
    for common in COMMON_RATIOS:
        if abs(ratio - common) < COMMON_RATIO_TOLERANCE:
            return COMMON_ASPECT_SCORE
    return OTHER_ASPECT_SCORE


def format_score(image_format: ImageFormat) -> int:
    return FORMAT_SCORES.get(image_format, DEFAULT_FORMAT_SCORE)


def _higher_wins(value_a: float, value_b: float) -> Winner:
    if value_a > value_b:
        return Winner.A
    if value_b > value_a:
        return Winner.B
    return Winner.TIE


def _compare_file_size(a: ImageMetadata, b: ImageMetadata) -> Winner:
    # меньший размер лучше
    return _higher_wins(-a.size_bytes, -b.size_bytes)


def _compare_aspect_ratio(a: ImageMetadata, b: ImageMetadata) -> Winner:
    return _higher_wins(aspect_score(a.dimensions), aspect_score(b.dimensions))


def _compare_resolution(a: ImageMetadata, b: ImageMetadata) -> Winner:
    pixels_a = a.dimensions.pixels
    pixels_b = b.dimensions.pixels
    if pixels_a > pixels_b * RESOLUTION_ADVANTAGE:
        return Winner.A
    if pixels_b > pixels_a * RESOLUTION_ADVANTAGE:
        return Winner.B
    return Winner.TIE


def _compare_format(a: ImageMetadata, b: ImageMetadata) -> Winner:
    return _higher_wins(format_score(a.format), format_score(b.format))


_FACTOR_RULES: Tuple[Tuple[Factor, Callable[[ImageMetadata, ImageMetadata], Winner]], ...] = (
    (Factor.FILE_SIZE, _compare_file_size),
    (Factor.ASPECT_RATIO, _compare_aspect_ratio),
    (Factor.RESOLUTION, _compare_resolution),
    (Factor.FORMAT, _compare_format),
)


def _validate(metadata: ImageMetadata, label: str) -> None:
    if not metadata.dimensions.is_valid():
        raise InvalidInput(
            f"Вариант {label}: некорректные размеры "
            f"{metadata.dimensions.width}x{metadata.dimensions.height}"
        )
    if metadata.size_bytes < 0:
        raise InvalidInput(f"Вариант {label}: отрицательный размер файла {metadata.size_bytes}")


def recommend(score_a: int, score_b: int) -> Recommendation:
    if score_a == score_b:
        return Recommendation(Winner.TIE, Confidence.EQUAL)
    winner = Winner.A if score_a > score_b else Winner.B
    margin = abs(score_a - score_b)
    confidence = Confidence.HIGH if margin > HIGH_CONFIDENCE_MARGIN else Confidence.MEDIUM
    return Recommendation(winner, confidence)


class ScoringEngine:
    """Чистая функция двух наборов метаданных; состояния не хранит."""

    def score(self, a: ImageMetadata, b: ImageMetadata) -> ComparisonResult:
        """Сравнивает варианты A и B.

        Raises:
            InvalidInput: если размеры не положительные целые или размер файла отрицательный.
        """
        _validate(a, "A")
        _validate(b, "B")

        factors: List[FactorResult] = []
        totals = {Winner.A: 0, Winner.B: 0}
        for factor, rule in _FACTOR_RULES:
            winner = rule(a, b)
            won_reason, tie_reason = _REASONS[factor]
            if winner is Winner.TIE:
                factors.append(FactorResult(factor, winner, tie_reason))
            else:
                totals[winner] += FACTOR_WEIGHTS[factor]
                factors.append(FactorResult(factor, winner, won_reason))

        score_a = totals[Winner.A]
        score_b = totals[Winner.B]
        return ComparisonResult(
            factors=tuple(factors),
            score_a=score_a,
            score_b=score_b,
            recommendation=recommend(score_a, score_b),
        )
