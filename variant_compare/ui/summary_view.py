"""Экран подробностей: технические характеристики и сводка различий."""
from __future__ import annotations

from typing import Callable, Dict, Optional

import customtkinter as ctk

from variant_compare.models.comparison_model import ComparisonSummary, VariantDetails
from variant_compare.models.image_model import SlotName


class SummaryView(ctk.CTkFrame):
    def __init__(self, master: ctk.CTkBaseClass, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_columnconfigure((0, 1), weight=1)

        self.on_back: Optional[Callable[[], None]] = None

        self._back_btn = ctk.CTkButton(self, text="← К сравнению", width=140, command=self._emit_back)
        self._back_btn.grid(row=0, column=0, padx=8, pady=(12, 4), sticky="w")

        self._variant_vals: Dict[SlotName, ctk.StringVar] = {}
        for column, slot in enumerate(SlotName):
            value = ctk.StringVar(value="—")
            ctk.CTkLabel(self, textvariable=value, justify="left", anchor="nw").grid(
                row=1, column=column, padx=8, pady=8, sticky="nsew"
            )
            self._variant_vals[slot] = value

        self._totals_title = ctk.CTkLabel(self, text="Сводка сравнения", font=ctk.CTkFont(size=16, weight="bold"))
        self._totals_title.grid(row=2, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")
        self._totals_val = ctk.StringVar(value="—")
        ctk.CTkLabel(self, textvariable=self._totals_val, justify="left", anchor="w").grid(
            row=3, column=0, columnspan=2, padx=8, pady=(0, 12), sticky="ew"
        )

    def render(self, summary: ComparisonSummary) -> None:
        self._variant_vals[SlotName.A].set(_describe("A", summary.variant_a))
        self._variant_vals[SlotName.B].set(_describe("B", summary.variant_b))
        ratio = "—" if summary.size_ratio_percent is None else f"{summary.size_ratio_percent:.0f}%"
        self._totals_val.set(
            f"Отношение размеров (A/B): {ratio}\n"
            f"Разница ширины: {summary.width_difference}px\n"
            f"Формат: {'одинаковый' if summary.same_format else 'разный'}"
        )

    def _emit_back(self) -> None:
        if self.on_back:
            self.on_back()


def _describe(label: str, details: VariantDetails) -> str:
    return (
        f"Вариант {label}: {details.name}\n"
        f"Формат: {details.format}\n"
        f"Размер файла: {details.size_label}\n"
        f"Размеры: {details.width} × {details.height}\n"
        f"Пропорции: {details.aspect_label}\n"
        f"Оптимально для: {details.device} ({details.device_rating})"
    )
