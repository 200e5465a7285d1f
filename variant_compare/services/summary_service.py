"""Сводка для экрана подробностей: пропорции, целевое устройство, размеры."""
from __future__ import annotations

from math import gcd
from typing import Optional, Tuple

from variant_compare.errors import InvalidInput
from variant_compare.models.comparison_model import ComparisonSummary, VariantDetails
from variant_compare.models.image_model import Dimensions, ImageMetadata

DESKTOP_MIN_RATIO = 1.7
TABLET_MIN_RATIO = 1.2
MOBILE_MAX_RATIO = 0.8

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
_SIZE_BASE = 1024


def aspect_label(width: int, height: int) -> str:
    """Пропорции, сокращённые на НОД: 1920x1080 -> "16:9"."""
    divisor = gcd(width, height)
    return f"{width // divisor}:{height // divisor}"


def device_target(width: int, height: int) -> Tuple[str, str]:
    """Для какого устройства лучше подходит изображение и насколько."""
    ratio = width / height
    if ratio > DESKTOP_MIN_RATIO:
        return "Desktop", "Excellent"
    if ratio > TABLET_MIN_RATIO:
        return "Tablet", "Good"
    if ratio < MOBILE_MAX_RATIO:
        return "Mobile", "Excellent"
    return "Universal", "Good"


def format_file_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return "0 Bytes"
    value = float(size_bytes)
    unit_index = 0
    while value >= _SIZE_BASE and unit_index < len(_SIZE_UNITS) - 1:
        value /= _SIZE_BASE
        unit_index += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit_index]}"


def _details(metadata: ImageMetadata) -> VariantDetails:
    dims: Dimensions = metadata.dimensions
    if not dims.is_valid():
        raise InvalidInput(f"Некорректные размеры {dims.width}x{dims.height}: {metadata.name}")
    device, rating = device_target(dims.width, dims.height)
    return VariantDetails(
        name=metadata.name,
        format=metadata.format.value,
        size_label=format_file_size(metadata.size_bytes),
        width=dims.width,
        height=dims.height,
        aspect_label=aspect_label(dims.width, dims.height),
        device=device,
        device_rating=rating,
    )


def summarize(a: ImageMetadata, b: ImageMetadata) -> ComparisonSummary:
    size_ratio: Optional[float] = None
    if b.size_bytes > 0:
        size_ratio = a.size_bytes / b.size_bytes * 100
    return ComparisonSummary(
        variant_a=_details(a),
        variant_b=_details(b),
        size_ratio_percent=size_ratio,
        width_difference=abs(a.dimensions.width - b.dimensions.width),
        same_format=a.format is b.format,
    )
