"""Модели данных для загруженных вариантов изображений.

Принципы:
- SRP: только структура данных, без логики извлечения.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from variant_compare.services.display_registry import DisplayHandle


class ImageFormat(str, Enum):
    """Формат, определяемый только по расширению имени файла."""
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"
    OTHER = "other"

    @classmethod
    def from_filename(cls, filename: str) -> "ImageFormat":
        """Расширение без учёта регистра; неизвестное расширение — `OTHER`, не ошибка."""
        suffix = PurePath(filename).suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            return cls.OTHER


class SlotName(str, Enum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    @property
    def pixels(self) -> int:
        return self.width * self.height

    def is_valid(self) -> bool:
        """Обе стороны — положительные целые."""
        return (
            isinstance(self.width, int)
            and isinstance(self.height, int)
            and self.width > 0
            and self.height > 0
        )


@dataclass(frozen=True)
class ImageMetadata:
    """Неизменяемые сведения о загруженном изображении.

    Fields:
        id: Непрозрачный уникальный идентификатор, создаётся при извлечении.
        source: Исходные байты (единоличное владение).
        display: Ресурс отображения; освобождается владельцем слота ровно один раз.
        dimensions: Размеры после учёта EXIF-ориентации, px.
        size_bytes: Размер исходных байтов.
        format: Формат по расширению файла.
        name: Исходное имя файла.
        mode: Режим PIL, например "RGBA".
    """
    id: str
    source: bytes = field(repr=False)
    display: "DisplayHandle"
    dimensions: Dimensions
    size_bytes: int
    format: ImageFormat
    name: str
    mode: str = ""
