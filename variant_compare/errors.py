"""Типизированные ошибки ядра сравнения вариантов.

Принципы:
- Пользовательские ошибки загрузки отделены от нарушений контракта (ошибки программиста).
- Ошибки значений наследуют `ValueError`, как и при загрузке нераспознанного файла.
"""
from __future__ import annotations


class VariantCompareError(Exception):
    """Базовая ошибка пакета."""


class UnsupportedFileKind(VariantCompareError, ValueError):
    """Полезная нагрузка не похожа на изображение."""


class FileTooLarge(VariantCompareError, ValueError):
    """Файл превышает допустимый размер загрузки."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(f"Файл слишком большой: {size_bytes} байт (максимум {limit_bytes})")
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class DecodeError(VariantCompareError):
    """Изображение не удалось декодировать (повреждено, обрезано, таймаут)."""


class InvalidInput(VariantCompareError, ValueError):
    """Вырожденные метаданные дошли до движка оценки."""


class DisplayHandleError(VariantCompareError, RuntimeError):
    """Ресурс отображения освобождён повторно или неизвестен реестру."""
