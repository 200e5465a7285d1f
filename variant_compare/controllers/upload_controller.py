"""Асинхронная загрузка вариантов в слоты.

Каждая загрузка получает номер (тикет) своего слота. Фиксируется только
самая свежая загрузка; устаревший результат отбрасывается, а его ресурс
отображения освобождается сразу после завершения извлечения.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional

from variant_compare.controllers.view_controller import ViewController
from variant_compare.logging_utils import get_logger
from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.services.image_service import MetadataExtractor


class UploadCoordinator:
    def __init__(self, controller: ViewController, extractor: MetadataExtractor) -> None:
        self._controller = controller
        self._extractor = extractor
        self._tickets: Dict[SlotName, int] = {SlotName.A: 0, SlotName.B: 0}
        self._lock = threading.Lock()

    def _issue_ticket(self, which: SlotName) -> int:
        with self._lock:
            self._tickets[which] += 1
            return self._tickets[which]

    def cancel(self, which: SlotName) -> None:
        """Делает устаревшими все незавершённые загрузки в слот."""
        which = SlotName(which)
        self._issue_ticket(which)
        get_logger().debug("Pending uploads to slot %s superseded", which.value)

    async def upload(self, which: SlotName, data: bytes, filename: str) -> Optional[ImageMetadata]:
        """Извлекает метаданные и фиксирует их в слоте.

        Returns:
            Зафиксированные метаданные либо None, если загрузку вытеснила более новая.

        Raises:
            UnsupportedFileKind, FileTooLarge, DecodeError: состояние слотов не меняется.
        """
        which = SlotName(which)
        ticket = self._issue_ticket(which)
        metadata = await self._extractor.extract(data, filename)

        # между проверкой тикета и фиксацией нет точек приостановки
        with self._lock:
            current = self._tickets[which] == ticket
            if current:
                self._controller.upload_slot(which, metadata)
        if not current:
            get_logger().info("Discarded superseded upload %s for slot %s", filename, which.value)
            metadata.display.release()
            return None
        return metadata
