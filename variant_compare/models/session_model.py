"""Состояние сессии: экран и проекция для слоя представления."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from variant_compare.models.comparison_model import ComparisonResult, ComparisonSummary
from variant_compare.models.image_model import ImageMetadata


class ViewState(str, Enum):
    UPLOAD = "upload"
    COMPARISON = "comparison"
    SUMMARY = "summary"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only проекция: экран, оба слота и результат сравнения (если оба заполнены)."""
    view_state: ViewState
    slot_a: Optional[ImageMetadata]
    slot_b: Optional[ImageMetadata]
    comparison: Optional[ComparisonResult]
    summary: Optional[ComparisonSummary]

    @property
    def both_filled(self) -> bool:
        return self.slot_a is not None and self.slot_b is not None
