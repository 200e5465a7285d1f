"""Результаты сравнения двух вариантов.

Все структуры производные: не хранятся и пересчитываются при каждом запросе.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Winner(str, Enum):
    A = "A"
    B = "B"
    TIE = "Tie"

    def swapped(self) -> "Winner":
        if self is Winner.A:
            return Winner.B
        if self is Winner.B:
            return Winner.A
        return self


class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    EQUAL = "Equal"


class Factor(str, Enum):
    """Эвристические факторы в фиксированном порядке оценки."""
    FILE_SIZE = "File Size"
    ASPECT_RATIO = "Aspect Ratio"
    RESOLUTION = "Resolution"
    FORMAT = "Format"


@dataclass(frozen=True)
class FactorResult:
    factor: Factor
    winner: Winner
    reason: str


@dataclass(frozen=True)
class Recommendation:
    winner: Winner
    confidence: Confidence


@dataclass(frozen=True)
class ComparisonResult:
    """Разбор по факторам, суммарные баллы и итоговая рекомендация."""
    factors: Tuple[FactorResult, ...]
    score_a: int
    score_b: int
    recommendation: Recommendation


@dataclass(frozen=True)
class VariantDetails:
    """Сведения одного варианта для экрана подробностей."""
    name: str
    format: str
    size_label: str
    width: int
    height: int
    aspect_label: str
    device: str
    device_rating: str


@dataclass(frozen=True)
class ComparisonSummary:
    """Сводка экрана подробностей.

    Fields:
        size_ratio_percent: Размер A относительно B в процентах; None при нулевом размере B.
        width_difference: Абсолютная разница ширины, px.
        same_format: Совпадают ли форматы.
    """
    variant_a: VariantDetails
    variant_b: VariantDetails
    size_ratio_percent: Optional[float]
    width_difference: int
    same_format: bool
