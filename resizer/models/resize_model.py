"""Модели параметров изменения размера: режимы заполнения, форматы, план отрисовки.

Принципы:
- SRP: только структуры данных и перечисления, расчёты вынесены в сервисы.
- Правки пользователя описываются отдельными неизменяемыми событиями.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class FillMode(str, Enum):
    """Способ вписывания исходника в целевой прямоугольник."""

    STRETCH = "stretch"  # растянуть, пропорции не сохраняются
    FIT = "fit"  # вписать целиком, поля заливаются фоном
    CROP = "crop"  # заполнить целиком, излишки обрезаются

    @property
    def label(self) -> str:
        return _FILL_MODE_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "FillMode":
        for mode, text in _FILL_MODE_LABELS.items():
            if text == label:
                return mode
        return cls(label)


_FILL_MODE_LABELS: Dict[FillMode, str] = {
    FillMode.STRETCH: "Растянуть",
    FillMode.FIT: "Вписать (поля)",
    FillMode.CROP: "Заполнить (обрезка)",
}


class OutputFormat(str, Enum):
    """Формат экспортируемого файла."""

    PNG = "png"
    JPG = "jpg"
    WEBP = "webp"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pil_format(self) -> str:
        return {"png": "PNG", "jpg": "JPEG", "webp": "WEBP"}[self.value]

    @property
    def label(self) -> str:
        return {"png": "PNG", "jpg": "JPEG", "webp": "WebP"}[self.value]

    @classmethod
    def from_label(cls, label: str) -> "OutputFormat":
        for fmt in cls:
            if fmt.label == label:
                return fmt
        return cls(label.lower())


@dataclass(frozen=True)
class TargetSpec:
    """Запрошенные размеры результата.

    Fields:
        width: Ширина, px, или None, если поле пустое.
        height: Высота, px, или None, если поле пустое.
        lock_aspect: Сохранять ли соотношение сторон исходника.
    """
    width: Optional[int] = None
    height: Optional[int] = None
    lock_aspect: bool = False


@dataclass(frozen=True)
class DrawPlan:
    """Геометрия одной операции отрисовки: куда рисовать и чем залить фон.

    Координаты вещественные и могут выходить за пределы холста (режим обрезки).
    """
    dest_x: float
    dest_y: float
    dest_width: float
    dest_height: float
    background_fill: Optional[Tuple[int, int, int, int]] = None

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        return (self.dest_x, self.dest_y, self.dest_width, self.dest_height)


# ---- Правки пользователя (вход редьюсера TargetSpec) ----
RawDimension = Union[int, str, None]


@dataclass(frozen=True)
class WidthEdited:
    raw: RawDimension


@dataclass(frozen=True)
class HeightEdited:
    raw: RawDimension


@dataclass(frozen=True)
class LockToggled:
    enabled: bool


@dataclass(frozen=True)
class ImageLoaded:
    width: int
    height: int


SpecEdit = Union[WidthEdited, HeightEdited, LockToggled, ImageLoaded]


class LoadState(str, Enum):
    """Состояние загрузки исходного изображения."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
