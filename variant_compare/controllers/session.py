"""Сессия сравнения: владеет реестром, извлечением, контроллером экранов.

Сессия создаётся и закрывается явно оболочкой-потребителем, поэтому
несколько сессий могут существовать одновременно и тестироваться изолированно.
"""
from __future__ import annotations

from concurrent.futures import Executor
from typing import Optional

from PIL import Image

from variant_compare.config import CompareSettings
from variant_compare.controllers.upload_controller import UploadCoordinator
from variant_compare.controllers.view_controller import ViewController
from variant_compare.logging_utils import get_logger
from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.models.session_model import SessionSnapshot, ViewState
from variant_compare.services.display_registry import DisplayRegistry
from variant_compare.services.image_service import MetadataExtractor


class ComparisonSession:
    def __init__(
        self,
        settings: Optional[CompareSettings] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.settings = settings or CompareSettings()
        self.registry = DisplayRegistry()
        self.extractor = MetadataExtractor(self.registry, self.settings, executor=executor)
        self.controller = ViewController()
        self._uploads = UploadCoordinator(self.controller, self.extractor)
        self._closed = False

    async def upload(self, which: SlotName, data: bytes, filename: str) -> Optional[ImageMetadata]:
        if self._closed:
            raise RuntimeError("Сессия закрыта")
        return await self._uploads.upload(which, data, filename)

    def cancel(self, which: SlotName) -> None:
        self._uploads.cancel(which)

    def clear_slot(self, which: SlotName) -> ViewState:
        return self.controller.clear_slot(which)

    def request_comparison(self) -> ViewState:
        return self.controller.request_comparison()

    def request_summary(self) -> ViewState:
        return self.controller.request_summary()

    def request_back_to_comparison(self) -> ViewState:
        return self.controller.request_back_to_comparison()

    def request_upload(self) -> ViewState:
        return self.controller.request_upload()

    def snapshot(self) -> SessionSnapshot:
        return self.controller.snapshot()

    def resolve_preview(self, metadata: ImageMetadata) -> Optional[Image.Image]:
        return self.registry.resolve(metadata.display.locator)

    def close(self) -> None:
        """Вытесняет незавершённые загрузки и освобождает ресурсы слотов."""
        if self._closed:
            return
        self._closed = True
        for which in SlotName:
            self._uploads.cancel(which)
        self.controller.close()
        get_logger().info("Session closed, %d display handles still active", self.registry.active_count)

    def __enter__(self) -> "ComparisonSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
