"""Реестр ресурсов отображения (аналог object URL в браузере).

Каждое успешно извлечённое изображение получает превью, доступное по
непрозрачному локатору. Ресурс освобождается явно и ровно один раз:
при очистке или перезаписи слота либо при отбрасывании устаревшего результата.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional
from uuid import uuid4

from PIL import Image

from variant_compare.errors import DisplayHandleError
from variant_compare.logging_utils import get_logger

_LOCATOR_SCHEME = "preview://"


class DisplayHandle:
    """Локатор превью; `release()` допустим ровно один раз."""

    def __init__(self, registry: "DisplayRegistry", locator: str) -> None:
        self._registry = registry
        self.locator = locator
        self.released = False

    def release(self) -> None:
        if self.released:
            raise DisplayHandleError(f"Ресурс уже освобождён: {self.locator}")
        self._registry._drop(self.locator)
        self.released = True

    def __repr__(self) -> str:
        return f"DisplayHandle({self.locator!r}, released={self.released})"


class DisplayRegistry:
    def __init__(self) -> None:
        self._previews: Dict[str, Image.Image] = {}
        self._lock = threading.Lock()
        self.allocated_total = 0
        self.released_total = 0

    def allocate(self, preview: Image.Image) -> DisplayHandle:
        locator = f"{_LOCATOR_SCHEME}{uuid4().hex}"
        with self._lock:
            self._previews[locator] = preview
            self.allocated_total += 1
        get_logger().debug("Allocated display handle %s", locator)
        return DisplayHandle(self, locator)

    def resolve(self, locator: str) -> Optional[Image.Image]:
        """Превью по локатору; None, если ресурс уже освобождён."""
        with self._lock:
            return self._previews.get(locator)

    @property
    def active_count(self) -> int:
        with self._lock:
            return len(self._previews)

    def _drop(self, locator: str) -> None:
        with self._lock:
            preview = self._previews.pop(locator, None)
            if preview is None:
                raise DisplayHandleError(f"Неизвестный ресурс: {locator}")
            self.released_total += 1
        preview.close()
        get_logger().debug("Released display handle %s", locator)
