"""Расчёт итоговых размеров результата и редьюсер параметров размера.

Принципы:
- SRP: только арифметика размеров, без UI и без PIL.
- Чистые функции: одинаковый вход всегда даёт одинаковый результат.
"""
from __future__ import annotations

import math
import re
from dataclasses import replace
from typing import Optional, Tuple

from resizer.constants import MAX_SIZE, MIN_SIZE
from resizer.models.resize_model import (
    HeightEdited,
    ImageLoaded,
    LockToggled,
    RawDimension,
    SpecEdit,
    TargetSpec,
    WidthEdited,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_dimension(raw: RawDimension) -> Optional[int]:
    """Разбирает значение поля размера.

    Строки читаются по ведущему целому ("12px" -> 12, "12.7" -> 12);
    пустые и нечисловые значения дают None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def round_half_up(value: float) -> int:
    """Округление к ближайшему целому, половина вверх (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp_dimension(value: int, max_size: int = MAX_SIZE) -> int:
    return max(MIN_SIZE, min(max_size, value))


class DimensionService:
    """Итоговые размеры и обновление `TargetSpec` по правкам пользователя.

    Политика блокировки пропорций: при правке одного поля второе пересчитывается
    сразу (`reduce`); `resolve` во время изменения размера заполняет только
    оставшиеся пустыми поля по тому же правилу.
    """

    def __init__(self, max_size: int = MAX_SIZE) -> None:
        self.max_size = max_size

    def resolve(
        self,
        requested_width: RawDimension,
        requested_height: RawDimension,
        lock_aspect: bool,
        source_aspect: Optional[float],
        max_size: Optional[int] = None,
    ) -> Tuple[int, int]:
        """Возвращает итоговые (ширина, высота) в пикселях.

        Args:
            requested_width: Запрошенная ширина (число, строка поля или None).
            requested_height: Запрошенная высота.
            lock_aspect: Выводить пустое поле из заполненного по пропорциям.
            source_aspect: Соотношение сторон исходника (ширина / высота).
            max_size: Верхняя граница каждой стороны.

        Returns:
            Кортеж целых. Значение 0 означает, что размер не определён и
            отрисовку нужно пропустить.
        """
        limit = self.max_size if max_size is None else max_size
        width = parse_dimension(requested_width)
        height = parse_dimension(requested_height)

        final_w = clamp_dimension(width, limit) if width is not None else 0
        final_h = clamp_dimension(height, limit) if height is not None else 0

        if lock_aspect and source_aspect:
            if width is not None and height is None:
                final_h = self._derive_height(final_w, source_aspect, limit)
            elif height is not None and width is None:
                final_w = self._derive_width(final_h, source_aspect, limit)

        return final_w, final_h

    def reduce(self, spec: TargetSpec, edit: SpecEdit, source_aspect: Optional[float]) -> TargetSpec:
        """Чистый редьюсер: (текущий TargetSpec, правка) -> новый TargetSpec."""
        if isinstance(edit, WidthEdited):
            width = parse_dimension(edit.raw)
            if width is None or not (spec.lock_aspect and source_aspect):
                return replace(spec, width=width)
            height = self._derive_height(clamp_dimension(width, self.max_size), source_aspect, self.max_size)
            return replace(spec, width=width, height=height)
        if isinstance(edit, HeightEdited):
            height = parse_dimension(edit.raw)
            if height is None or not (spec.lock_aspect and source_aspect):
                return replace(spec, height=height)
            width = self._derive_width(clamp_dimension(height, self.max_size), source_aspect, self.max_size)
            return replace(spec, width=width, height=height)
        if isinstance(edit, LockToggled):
            return replace(spec, lock_aspect=edit.enabled)
        if isinstance(edit, ImageLoaded):
            return replace(spec, width=edit.width, height=edit.height)
        raise TypeError(f"Неизвестная правка: {edit!r}")

    # ---- Helpers ----
    @staticmethod
    def _derive_height(width: int, aspect: float, limit: int) -> int:
        return clamp_dimension(round_half_up(width / aspect), limit)

    @staticmethod
    def _derive_width(height: int, aspect: float, limit: int) -> int:
        return clamp_dimension(round_half_up(height * aspect), limit)
