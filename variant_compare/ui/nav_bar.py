from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from variant_compare.models.session_model import ViewState

_LABELS = {
    ViewState.UPLOAD: "Загрузка",
    ViewState.COMPARISON: "Сравнение",
    ViewState.SUMMARY: "Подробности",
}


class NavBar(ctk.CTkFrame):
    """Нижняя панель навигации между экранами."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=56, **kwargs)

        # callbacks
        self.on_navigate: Optional[Callable[[ViewState], None]] = None

        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._buttons = ctk.CTkSegmentedButton(
            self,
            values=[_LABELS[state] for state in ViewState],
            command=self._on_click,
        )
        self._buttons.set(_LABELS[ViewState.UPLOAD])
        self._buttons.grid(row=0, column=0, padx=12, pady=8)

    # public API (sync from controller)
    def set_state(self, view_state: ViewState, both_filled: bool) -> None:
        """Подсвечивает текущий экран; «Сравнение» и «Подробности» доступны при двух вариантах."""
        self._buttons.set(_LABELS[view_state])
        # CTkSegmentedButton не умеет отключать отдельные кнопки, поэтому обходим через внутренний словарь
        for state in (ViewState.COMPARISON, ViewState.SUMMARY):
            button = self._buttons._buttons_dict.get(_LABELS[state])
            if button is not None:
                button.configure(state="normal" if both_filled else "disabled")

    # events
    def _on_click(self, value: str) -> None:
        for state, label in _LABELS.items():
            if label == value:
                if self.on_navigate:
                    self.on_navigate(state)
                return
