"""Машина состояний экранов над двумя слотами вариантов.

Инварианты:
- В состояниях «сравнение» и «подробности» оба слота заполнены.
- Очистка слота в этих состояниях всегда возвращает на экран загрузки.
- Ресурс отображения освобождается ровно один раз: при очистке,
  перезаписи слота или закрытии контроллера.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional

from variant_compare.logging_utils import get_logger
from variant_compare.models.image_model import ImageMetadata, SlotName
from variant_compare.models.session_model import SessionSnapshot, ViewState
from variant_compare.services.scoring_service import ScoringEngine
from variant_compare.services.summary_service import summarize

_RESULT_STATES = (ViewState.COMPARISON, ViewState.SUMMARY)


class ViewController:
    def __init__(self, scoring_engine: Optional[ScoringEngine] = None) -> None:
        self._scoring = scoring_engine or ScoringEngine()
        self._slots: Dict[SlotName, Optional[ImageMetadata]] = {SlotName.A: None, SlotName.B: None}
        self._view_state = ViewState.UPLOAD
        # все мутации слотов и экрана сериализуются
        self._lock = threading.RLock()

    @property
    def view_state(self) -> ViewState:
        return self._view_state

    def slot(self, which: SlotName) -> Optional[ImageMetadata]:
        return self._slots[SlotName(which)]

    def both_filled(self) -> bool:
        with self._lock:
            return all(m is not None for m in self._slots.values())

    # ---- Transitions ----
    def upload_slot(self, which: SlotName, metadata: ImageMetadata) -> ViewState:
        """Кладёт метаданные в слот; при заполнении обоих слотов переходит к сравнению."""
        which = SlotName(which)
        with self._lock:
            other = SlotName.B if which is SlotName.A else SlotName.A
            if self._slots[other] is metadata:
                raise ValueError(f"Метаданные {metadata.id} уже занимают слот {other.value}")
            previous = self._slots[which]
            self._slots[which] = metadata
            if previous is not None and previous is not metadata:
                previous.display.release()
            get_logger().info("Slot %s <- %s (%s)", which.value, metadata.name, metadata.id)
            if self._view_state is ViewState.UPLOAD and self.both_filled():
                self._set_state(ViewState.COMPARISON)
            return self._view_state

    def clear_slot(self, which: SlotName) -> ViewState:
        which = SlotName(which)
        with self._lock:
            previous = self._slots[which]
            self._slots[which] = None
            if previous is not None:
                previous.display.release()
                get_logger().info("Slot %s cleared (%s)", which.value, previous.id)
            if self._view_state in _RESULT_STATES:
                self._set_state(ViewState.UPLOAD)
            return self._view_state

    def request_comparison(self) -> ViewState:
        with self._lock:
            if self.both_filled():
                self._set_state(ViewState.COMPARISON)
            return self._view_state

    def request_summary(self) -> ViewState:
        with self._lock:
            if self.both_filled():
                self._set_state(ViewState.SUMMARY)
            return self._view_state

    def request_back_to_comparison(self) -> ViewState:
        with self._lock:
            if self._view_state is ViewState.SUMMARY:
                self._set_state(ViewState.COMPARISON)
            return self._view_state

    def request_upload(self) -> ViewState:
        with self._lock:
            self._set_state(ViewState.UPLOAD)
            return self._view_state

    # ---- Projection ----
    def snapshot(self) -> SessionSnapshot:
        """Проекция для слоя представления; оценка пересчитывается при каждом вызове."""
        with self._lock:
            slot_a = self._slots[SlotName.A]
            slot_b = self._slots[SlotName.B]
            view_state = self._view_state
        comparison = None
        summary = None
        if slot_a is not None and slot_b is not None:
            comparison = self._scoring.score(slot_a, slot_b)
            summary = summarize(slot_a, slot_b)
        return SessionSnapshot(
            view_state=view_state,
            slot_a=slot_a,
            slot_b=slot_b,
            comparison=comparison,
            summary=summary,
        )

    # ---- Lifecycle ----
    def close(self) -> None:
        """Освобождает ресурсы всех занятых слотов и возвращает на экран загрузки."""
        with self._lock:
            for which in SlotName:
                occupant = self._slots[which]
                self._slots[which] = None
                if occupant is not None:
                    occupant.display.release()
            self._set_state(ViewState.UPLOAD)

    def __enter__(self) -> "ViewController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _set_state(self, state: ViewState) -> None:
        if state is not self._view_state:
            get_logger().debug("View %s -> %s", self._view_state.value, state.value)
        self._view_state = state
