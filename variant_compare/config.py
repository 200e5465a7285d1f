"""Настройки сессии сравнения.

Значения по умолчанию совпадают с тем, что обещает интерфейс загрузки
(«PNG, JPG, GIF up to 10MB»). Переопределяются переменными окружения.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

MAX_UPLOAD_BYTES_ENV = "VARIANT_COMPARE_MAX_UPLOAD_BYTES"
DECODE_TIMEOUT_ENV = "VARIANT_COMPARE_DECODE_TIMEOUT"
PREVIEW_MAX_SIDE_ENV = "VARIANT_COMPARE_PREVIEW_MAX_SIDE"
LOG_FILE_ENV = "VARIANT_COMPARE_LOG_FILE"
VERBOSE_ENV = "VARIANT_COMPARE_VERBOSE"

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_DECODE_TIMEOUT_SECONDS = 10.0
DEFAULT_PREVIEW_MAX_SIDE = 512

_TRUTHY = {"1", "true", "yes", "on"}


def require_positive_int(value: int, field_name: str) -> int:
    """Validate a positive integer input and return it."""
    if value <= 0:
        raise ValueError(f"{field_name} must be greater than zero.")
    return value


def require_positive_float(value: float, field_name: str) -> float:
    """Validate a positive float input and return it."""
    if value <= 0:
        raise ValueError(f"{field_name} must be greater than zero.")
    return value


@dataclass(frozen=True)
class CompareSettings:
    """Runtime configuration of a comparison session.

    Fields:
        max_upload_bytes: Жёсткий предел размера загружаемого файла.
        decode_timeout_seconds: Таймаут декодирования одного изображения.
        preview_max_side: Наибольшая сторона превью для отображения, px.
        log_file: Файл журнала; None — вывод в stderr.
        verbose: Уровень DEBUG вместо INFO.
    """
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    decode_timeout_seconds: float = DEFAULT_DECODE_TIMEOUT_SECONDS
    preview_max_side: int = DEFAULT_PREVIEW_MAX_SIDE
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        require_positive_int(self.max_upload_bytes, "max_upload_bytes")
        require_positive_float(self.decode_timeout_seconds, "decode_timeout_seconds")
        require_positive_int(self.preview_max_side, "preview_max_side")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CompareSettings":
        """Собирает настройки из переменных окружения, остальное — по умолчанию."""
        env = os.environ if environ is None else environ
        try:
            max_upload = int(env.get(MAX_UPLOAD_BYTES_ENV, DEFAULT_MAX_UPLOAD_BYTES))
            timeout = float(env.get(DECODE_TIMEOUT_ENV, DEFAULT_DECODE_TIMEOUT_SECONDS))
            preview_side = int(env.get(PREVIEW_MAX_SIDE_ENV, DEFAULT_PREVIEW_MAX_SIDE))
        except ValueError as exc:
            raise ValueError(f"Некорректное значение настройки: {exc}") from exc

        log_file_value = env.get(LOG_FILE_ENV, "").strip()
        return cls(
            max_upload_bytes=max_upload,
            decode_timeout_seconds=timeout,
            preview_max_side=preview_side,
            log_file=Path(log_file_value) if log_file_value else None,
            verbose=env.get(VERBOSE_ENV, "").strip().lower() in _TRUTHY,
        )
