"""Экран сравнения: рекомендация, разбор по факторам, оба варианта рядом."""
from __future__ import annotations

from typing import Callable, Dict, Optional

import customtkinter as ctk
from PIL import Image

from variant_compare.models.comparison_model import ComparisonResult, Winner
from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.services.summary_service import format_file_size

_WINNER_COLORS = {Winner.A: "#2563EB", Winner.B: "#7C3AED", Winner.TIE: "#6B7280"}
PREVIEW_SIZE = (360, 270)


class ComparisonView(ctk.CTkFrame):
    def __init__(self, master: ctk.CTkBaseClass, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_columnconfigure((0, 1), weight=1)

        self.on_show_details: Optional[Callable[[], None]] = None

        self._headline_val = ctk.StringVar(value="—")
        self._confidence_val = ctk.StringVar(value="")
        self._headline = ctk.CTkLabel(self, textvariable=self._headline_val, font=ctk.CTkFont(size=20, weight="bold"))
        self._headline.grid(row=0, column=0, columnspan=2, padx=8, pady=(12, 2))
        ctk.CTkLabel(self, textvariable=self._confidence_val).grid(row=1, column=0, columnspan=2, padx=8, pady=(0, 8))

        self._factors = ctk.CTkFrame(self)
        self._factors.grid(row=2, column=0, columnspan=2, padx=8, pady=4, sticky="ew")
        self._factors.grid_columnconfigure(1, weight=1)

        self._cards: Dict[SlotName, ctk.CTkLabel] = {}
        self._card_images: Dict[SlotName, ctk.CTkImage] = {}
        for column, slot in enumerate(SlotName):
            card = ctk.CTkLabel(self, text="", compound="top", justify="left")
            card.grid(row=3, column=column, padx=8, pady=8, sticky="nsew")
            self._cards[slot] = card

        self._details_btn = ctk.CTkButton(self, text="Подробный анализ", command=self._emit_show_details)
        self._details_btn.grid(row=4, column=0, columnspan=2, padx=8, pady=(4, 12))

    def render(
        self,
        result: ComparisonResult,
        variants: Dict[SlotName, ImageMetadata],
        previews: Dict[SlotName, Optional[Image.Image]],
    ) -> None:
        recommendation = result.recommendation
        if recommendation.winner is Winner.TIE:
            self._headline_val.set("Оба варианта равноценны")
            self._confidence_val.set(f"Уверенность: {recommendation.confidence.value}")
        else:
            points = result.score_a if recommendation.winner is Winner.A else result.score_b
            self._headline_val.set(f"Рекомендуется вариант {recommendation.winner.value}")
            self._confidence_val.set(f"Уверенность: {recommendation.confidence.value} • Баллы: {points}")
        self._headline.configure(text_color=_WINNER_COLORS[recommendation.winner])

        for child in self._factors.winfo_children():
            child.destroy()
        for row, factor in enumerate(result.factors):
            verdict = "Равно" if factor.winner is Winner.TIE else f"Вариант {factor.winner.value}"
            ctk.CTkLabel(self._factors, text=factor.factor.value, anchor="w").grid(
                row=row, column=0, padx=8, pady=2, sticky="w"
            )
            ctk.CTkLabel(self._factors, text=factor.reason, anchor="w").grid(
                row=row, column=1, padx=8, pady=2, sticky="w"
            )
            ctk.CTkLabel(self._factors, text=verdict, text_color=_WINNER_COLORS[factor.winner]).grid(
                row=row, column=2, padx=8, pady=2, sticky="e"
            )

        for slot, card in self._cards.items():
            metadata = variants[slot]
            preview = previews.get(slot)
            mark = "  ★ Рекомендуется" if recommendation.winner.value == slot.value else ""
            text = (
                f"Вариант {slot.value}{mark}\n"
                f"Размеры: {metadata.dimensions.width} × {metadata.dimensions.height}\n"
                f"Размер: {format_file_size(metadata.size_bytes)}"
            )
            if preview is not None:
                width, height = preview.size
                scale = min(PREVIEW_SIZE[0] / width, PREVIEW_SIZE[1] / height)
                image = ctk.CTkImage(
                    light_image=preview,
                    dark_image=preview,
                    size=(max(1, int(width * scale)), max(1, int(height * scale))),
                )
                self._card_images[slot] = image
                card.configure(image=image, text=text)
            else:
                card.configure(image=None, text=text)

    def _emit_show_details(self) -> None:
        if self.on_show_details:
            self.on_show_details()
