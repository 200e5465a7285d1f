"""Панель одного варианта: загрузка, превью, сведения, удаление.

Принципы:
- SRP: управляет только UI слота, не содержит логики извлечения.
- ISP: события через `on_*`, обновление через компактные `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
from PIL import Image

from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.services.summary_service import format_file_size

PREVIEW_SIZE = (320, 240)


class UploadPanel(ctk.CTkFrame):
    """Пустой слот приглашает загрузить файл; заполненный показывает превью."""
    def __init__(self, master: ctk.CTkBaseClass, slot: SlotName, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.slot = slot
        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[SlotName], None]] = None
        self.on_remove: Optional[Callable[[SlotName], None]] = None

        self._title = ctk.CTkLabel(self, text=f"Вариант {slot.value}", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._preview = ctk.CTkLabel(self, text="Изображение не выбрано", height=PREVIEW_SIZE[1])
        self._preview.grid(row=1, column=0, padx=8, pady=4, sticky="nsew")
        self._preview_image: Optional[ctk.CTkImage] = None

        self._info_val = ctk.StringVar(value="PNG, JPG, GIF до 10 МБ")
        self._info = ctk.CTkLabel(self, textvariable=self._info_val, anchor="w", justify="left")
        self._info.grid(row=2, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._open_btn = ctk.CTkButton(self, text=f"Загрузить вариант {slot.value}…", command=self._emit_open_file)
        self._open_btn.grid(row=3, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._remove_btn = ctk.CTkButton(
            self, text="Удалить", fg_color="#C0392B", hover_color="#A93226", command=self._emit_remove
        )
        self._remove_btn.grid(row=4, column=0, padx=8, pady=(0, 8), sticky="ew")
        self._remove_btn.grid_remove()

    # public API
    def set_loading(self, loading: bool) -> None:
        self._open_btn.configure(state="disabled" if loading else "normal")
        if loading:
            self._info_val.set("Обработка изображения…")

    def set_metadata(self, metadata: Optional[ImageMetadata], preview: Optional[Image.Image]) -> None:
        """Отображает занятый слот или возвращает приглашение к загрузке."""
        if metadata is None:
            self._preview_image = None
            self._preview.configure(image=None, text="Изображение не выбрано")
            self._info_val.set("PNG, JPG, GIF до 10 МБ")
            self._remove_btn.grid_remove()
            return

        if preview is not None:
            self._preview_image = ctk.CTkImage(light_image=preview, dark_image=preview, size=_fit(preview.size))
            self._preview.configure(image=self._preview_image, text="")
        dims = metadata.dimensions
        self._info_val.set(
            f"{metadata.name}\n{dims.width} × {dims.height} px, {format_file_size(metadata.size_bytes)}"
        )
        self._remove_btn.grid()

    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file(self.slot)

    def _emit_remove(self) -> None:
        if self.on_remove:
            self.on_remove(self.slot)


def _fit(size: tuple[int, int]) -> tuple[int, int]:
    """Вписывает превью в `PREVIEW_SIZE` с сохранением пропорций."""
    width, height = size
    scale = min(PREVIEW_SIZE[0] / width, PREVIEW_SIZE[1] / height)
    return max(1, int(width * scale)), max(1, int(height * scale))
