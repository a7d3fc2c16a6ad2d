"""Отрисовка исходника на холсте по готовому `DrawPlan`.

Принципы:
- SRP: только пиксельная работа; геометрию считает `CompositorService`.
- Холст не мутирует исходное изображение.
"""
from __future__ import annotations

import logging
from typing import Final, Optional, Tuple

from PIL import Image

from resizer.constants import RESAMPLE
from resizer.models.resize_model import DrawPlan
from resizer.services.dimension_service import round_half_up

logger: Final = logging.getLogger(__name__)

TRANSPARENT: Final[Tuple[int, int, int, int]] = (0, 0, 0, 0)


class RenderService:
    def render(self, image: Image.Image, plan: DrawPlan, size: Tuple[int, int]) -> Image.Image:
        """Создаёт холст размера `size` и рисует на нём `image` согласно `plan`.

        Холст в режиме RGBA: без заливки фона непокрытые области прозрачны.
        Всё, что выходит за пределы холста, отсекается; ресэмплируется только
        видимая часть исходника.
        """
        canvas_w, canvas_h = size
        surface = Image.new("RGBA", (canvas_w, canvas_h), plan.background_fill or TRANSPARENT)

        src = image if image.mode == "RGBA" else image.convert("RGBA")
        box = self._visible_region(plan, canvas_w, canvas_h)
        if box is None:
            logger.debug("Draw plan %s lies outside %dx%d canvas", plan.rect, canvas_w, canvas_h)
            return surface

        left, top, right, bottom = box
        src_w, src_h = src.size
        src_left, src_right = _source_span(left, right, plan.dest_x, plan.dest_width, src_w)
        src_top, src_bottom = _source_span(top, bottom, plan.dest_y, plan.dest_height, src_h)
        drawn = src.resize((right - left, bottom - top), RESAMPLE, box=(src_left, src_top, src_right, src_bottom))
        surface.alpha_composite(drawn, dest=(left, top))
        return surface

    def _visible_region(self, plan: DrawPlan, canvas_w: int, canvas_h: int) -> Optional[Tuple[int, int, int, int]]:
        """Пересечение прямоугольника плана с холстом, привязанное к пиксельной сетке.

        Прямоугольник тоньше пикселя, но пересекающий холст, занимает минимум
        один пиксель по каждой оси.
        """
        x_span = _snap_span(plan.dest_x, plan.dest_width, canvas_w)
        y_span = _snap_span(plan.dest_y, plan.dest_height, canvas_h)
        if x_span is None or y_span is None:
            return None
        return x_span[0], y_span[0], x_span[1], y_span[1]


def _snap_span(start: float, length: float, limit: int) -> Optional[Tuple[int, int]]:
    """Отрезок [start, start + length) на сетке [0, limit) или None без пересечения."""
    end = start + length
    if end <= 0 or start >= limit:
        return None
    lo = min(limit - 1, max(0, round_half_up(start)))
    hi = max(lo + 1, min(limit, round_half_up(end)))
    return lo, hi


def _source_span(lo: int, hi: int, dest_start: float, dest_length: float, src_size: int) -> Tuple[float, float]:
    """Участок исходника, который попадает в пиксели [lo, hi) холста."""
    scale = src_size / dest_length
    src_lo = min(float(src_size), max(0.0, (lo - dest_start) * scale))
    src_hi = min(float(src_size), max(0.0, (hi - dest_start) * scale))
    if src_hi <= src_lo:
        # пиксель шире всего прямоугольника: в него сводится весь исходник по этой оси
        return 0.0, float(src_size)
    return src_lo, src_hi
