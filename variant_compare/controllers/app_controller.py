"""Контроллер приложения: оркестрация UI и сессии сравнения.

SOLID:
- SRP: класс связывает виджеты с сессией (без логики оценки и извлечения).
- DIP: UI видит только проекцию сессии; сессия ничего не знает о виджетах.
Clean Code:
- Обработчики компактны; извлечение идёт в фоновом цикле, результат
  забирается опросом в потоке Tk.
"""
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog, messagebox
from typing import Dict, Optional

import customtkinter as ctk

from variant_compare.controllers.session import ComparisonSession
from variant_compare.errors import VariantCompareError
from variant_compare.logging_utils import get_logger
from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.models.session_model import ViewState
from variant_compare.services.async_runner import BackgroundLoop
from variant_compare.ui.comparison_view import ComparisonView
from variant_compare.ui.nav_bar import NavBar
from variant_compare.ui.summary_view import SummaryView
from variant_compare.ui.upload_panel import UploadPanel

POLL_INTERVAL_MS = 50


@dataclass
class AppController:
    """Связывает элементы UI с сессией.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Чтение выбранного файла и асинхронная загрузка в слот.
    - Переключение экранов по проекции сессии.
    """
    window: ctk.CTk
    upload_screen: ctk.CTkFrame
    panels: Dict[SlotName, UploadPanel]
    compare_button: ctk.CTkButton
    comparison_view: ComparisonView
    summary_view: SummaryView
    nav_bar: NavBar
    session: ComparisonSession

    _loop: BackgroundLoop = field(default_factory=BackgroundLoop)

    def bind_events(self) -> None:
        """Регистрирует обработчики и запускает фоновый цикл загрузок."""
        for panel in self.panels.values():
            panel.on_open_file = self._handle_open_file
            panel.on_remove = self._handle_remove
        self.compare_button.configure(command=self._handle_compare)
        self.comparison_view.on_show_details = self._handle_show_details
        self.summary_view.on_back = self._handle_back
        self.nav_bar.on_navigate = self._handle_navigate
        self.window.protocol("WM_DELETE_WINDOW", self.shutdown)
        self._loop.start()
        self._refresh()

    def shutdown(self) -> None:
        self.session.close()
        self._loop.stop()
        self.window.destroy()

    # ---- Handlers ----
    def _handle_open_file(self, slot: SlotName) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title=f"Выберите вариант {slot.value}",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.gif *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            get_logger().warning("File dialog could not be opened")
            return

        if not file_path:
            return

        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            messagebox.showerror("Ошибка", f"Не удалось прочитать файл: {exc}")
            return

        self.panels[slot].set_loading(True)
        future = self._loop.submit(self.session.upload(slot, data, path.name))
        self.window.after(POLL_INTERVAL_MS, self._poll_upload, slot, future)

    def _poll_upload(self, slot: SlotName, future: "Future[Optional[ImageMetadata]]") -> None:
        if not future.done():
            self.window.after(POLL_INTERVAL_MS, self._poll_upload, slot, future)
            return

        self.panels[slot].set_loading(False)
        try:
            future.result()
        except VariantCompareError as exc:
            messagebox.showerror("Ошибка обработки изображения", str(exc))
        self._refresh()

    def _handle_remove(self, slot: SlotName) -> None:
        self.session.clear_slot(slot)
        self._refresh()

    def _handle_compare(self) -> None:
        self.session.request_comparison()
        self._refresh()

    def _handle_show_details(self) -> None:
        self.session.request_summary()
        self._refresh()

    def _handle_back(self) -> None:
        self.session.request_back_to_comparison()
        self._refresh()

    def _handle_navigate(self, state: ViewState) -> None:
        if state is ViewState.UPLOAD:
            self.session.request_upload()
        elif state is ViewState.COMPARISON:
            self.session.request_comparison()
        else:
            self.session.request_summary()
        self._refresh()

    # ---- Helpers ----
    def _refresh(self) -> None:
        """Перерисовывает экран по текущей проекции сессии."""
        snapshot = self.session.snapshot()
        variants = {SlotName.A: snapshot.slot_a, SlotName.B: snapshot.slot_b}
        previews = {
            slot: self.session.resolve_preview(metadata) if metadata is not None else None
            for slot, metadata in variants.items()
        }

        for slot, panel in self.panels.items():
            panel.set_metadata(variants[slot], previews[slot])
        if snapshot.both_filled:
            self.compare_button.grid()
        else:
            self.compare_button.grid_remove()
        self.nav_bar.set_state(snapshot.view_state, snapshot.both_filled)

        for frame in (self.upload_screen, self.comparison_view, self.summary_view):
            frame.grid_remove()
        if snapshot.view_state is ViewState.COMPARISON and snapshot.comparison is not None:
            self.comparison_view.render(snapshot.comparison, variants, previews)
            self.comparison_view.grid()
        elif snapshot.view_state is ViewState.SUMMARY and snapshot.summary is not None:
            self.summary_view.render(snapshot.summary)
            self.summary_view.grid()
        else:
            self.upload_screen.grid()
