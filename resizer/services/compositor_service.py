"""Геометрия компоновки: куда и каким размером рисовать исходник на холсте.

Принципы:
- SRP: чистый расчёт `DrawPlan`, сама отрисовка выполняется `RenderService`.
- Каждому `FillMode` соответствует ровно один обработчик в таблице `_PLANNERS`.
"""
from __future__ import annotations

from typing import Callable, Dict

from resizer.constants import FIT_BACKGROUND
from resizer.models.resize_model import DrawPlan, FillMode

_Planner = Callable[[float, float, float], DrawPlan]


def _plan_stretch(img_aspect: float, target_w: float, target_h: float) -> DrawPlan:
    # пропорции исходника игнорируются
    return DrawPlan(0, 0, target_w, target_h)


def _plan_fit(img_aspect: float, target_w: float, target_h: float) -> DrawPlan:
    if img_aspect > target_w / target_h:
        dest_w = target_w
        dest_h = target_w / img_aspect
    else:
        dest_h = target_h
        dest_w = target_h * img_aspect
    return DrawPlan(
        dest_x=(target_w - dest_w) / 2,
        dest_y=(target_h - dest_h) / 2,
        dest_width=dest_w,
        dest_height=dest_h,
        background_fill=FIT_BACKGROUND,
    )


def _plan_crop(img_aspect: float, target_w: float, target_h: float) -> DrawPlan:
    # излишек симметрично уходит за края холста, отсечение делает холст
    if img_aspect > target_w / target_h:
        dest_w = target_h * img_aspect
        return DrawPlan((target_w - dest_w) / 2, 0, dest_w, target_h)
    dest_h = target_w / img_aspect
    return DrawPlan(0, (target_h - dest_h) / 2, target_w, dest_h)


_PLANNERS: Dict[FillMode, _Planner] = {
    FillMode.STRETCH: _plan_stretch,
    FillMode.FIT: _plan_fit,
    FillMode.CROP: _plan_crop,
}


class CompositorService:
    def plan(
        self,
        source_width: float,
        source_height: float,
        target_width: float,
        target_height: float,
        fill_mode: FillMode | str,
    ) -> DrawPlan:
        """Рассчитывает прямоугольник отрисовки исходника на целевом холсте.

        Args:
            source_width: Ширина исходника, px.
            source_height: Высота исходника, px (> 0).
            target_width: Ширина холста, px.
            target_height: Высота холста, px (> 0).
            fill_mode: Режим заполнения (`FillMode` или его строковое значение).

        Returns:
            `DrawPlan` с координатами в пикселях холста и заливкой фона, если она нужна.

        Note:
            Нулевые высоты не проверяются: вызывающий код обязан их исключить
            (`DimensionService.resolve` гарантирует размеры >= 1).
        """
        mode = FillMode(fill_mode)
        img_aspect = source_width / source_height
        return _PLANNERS[mode](img_aspect, target_width, target_height)
