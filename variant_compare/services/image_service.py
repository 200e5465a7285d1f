"""Извлечение метаданных из загруженных байтов.

Принципы:
- SRP: класс отвечает только за проверку, декодирование и упаковку свойств.
- Декодирование выполняется в рабочем потоке и не блокирует цикл событий.
- Ресурс отображения выделяется только после успешного декодирования:
  отменённое или просроченное извлечение ничего не удерживает.
"""
from __future__ import annotations

import asyncio
import io
import mimetypes
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Optional
from uuid import uuid4

from PIL import Image, ImageOps, UnidentifiedImageError

from variant_compare.config import CompareSettings
from variant_compare.errors import DecodeError, FileTooLarge, UnsupportedFileKind
from variant_compare.logging_utils import get_logger
from variant_compare.models.image_model import Dimensions, ImageFormat, ImageMetadata
from variant_compare.services.display_registry import DisplayRegistry

# Сигнатуры распознаваемых форматов (первые байты файла)
_SIGNATURES = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
    b"BM",
    b"II*\x00",
    b"MM\x00*",
)


def _has_image_signature(data: bytes) -> bool:
    if data.startswith(_SIGNATURES):
        return True
    return len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP"


def is_image_like(data: bytes, filename: str) -> bool:
    """Изображение по MIME-типу имени файла или по сигнатуре содержимого."""
    mime, _encoding = mimetypes.guess_type(filename)
    if mime is not None and mime.startswith("image/"):
        return True
    return _has_image_signature(data)


@dataclass(frozen=True)
class _DecodedImage:
    width: int
    height: int
    mode: str
    preview: Image.Image


class MetadataExtractor:
    def __init__(
        self,
        registry: DisplayRegistry,
        settings: Optional[CompareSettings] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._registry = registry
        self._settings = settings or CompareSettings()
        self._executor = executor

    async def extract(self, data: bytes, filename: str) -> ImageMetadata:
        """Проверяет и декодирует загруженные байты.

        Args:
            data: Исходные байты файла.
            filename: Имя файла; по расширению определяется формат.

        Returns:
            `ImageMetadata` с выделенным ресурсом отображения. Освободить его
            обязан тот, кто примет результат.

        Raises:
            UnsupportedFileKind: если содержимое не похоже на изображение.
            FileTooLarge: если размер превышает `max_upload_bytes`.
            DecodeError: если изображение не декодируется или истёк таймаут.
        """
        logger = get_logger()
        if not is_image_like(data, filename):
            logger.warning("Rejected %s: not an image", filename)
            raise UnsupportedFileKind(f"Файл не является изображением: {filename}")

        limit = self._settings.max_upload_bytes
        if len(data) > limit:
            logger.warning("Rejected %s: %d bytes exceeds limit %d", filename, len(data), limit)
            raise FileTooLarge(len(data), limit)

        loop = asyncio.get_running_loop()
        try:
            decoded = await asyncio.wait_for(
                loop.run_in_executor(self._executor, self._decode, data),
                timeout=self._settings.decode_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.warning("Decoding %s timed out", filename)
            raise DecodeError(f"Превышено время декодирования: {filename}") from exc

        handle = self._registry.allocate(decoded.preview)
        metadata = ImageMetadata(
            id=uuid4().hex,
            source=data,
            display=handle,
            dimensions=Dimensions(decoded.width, decoded.height),
            size_bytes=len(data),
            format=ImageFormat.from_filename(filename),
            name=filename,
            mode=decoded.mode,
        )
        logger.info(
            "Extracted %s: %dx%d, %d bytes, %s",
            filename, decoded.width, decoded.height, metadata.size_bytes, metadata.format.value,
        )
        return metadata

    def _decode(self, data: bytes) -> _DecodedImage:
        """Полное декодирование (как `onload` у <img>): обрезанные файлы не проходят."""
        try:
            with Image.open(io.BytesIO(data)) as opened:
                opened.load()
                image = ImageOps.exif_transpose(opened)
                width, height = image.size
                mode = image.mode
                preview = image.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Не удалось распознать изображение: {exc}") from exc
        except (OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Изображение повреждено: {exc}") from exc

        if width <= 0 or height <= 0:
            raise DecodeError(f"Некорректные размеры изображения: {width}x{height}")

        side = self._settings.preview_max_side
        preview.thumbnail((side, side))
        return _DecodedImage(width=width, height=height, mode=mode, preview=preview)
