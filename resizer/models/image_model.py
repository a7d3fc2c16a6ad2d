"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Неизменяемость (`frozen=True`): при новой загрузке модель заменяется целиком.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель исходного изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу (None, если изображение пришло из памяти).
        pil_image: Декодированное изображение PIL (RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла, например "RGB".
        size_bytes: Размер файла или буфера, если доступен.
    """
    path: Optional[Path]
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]

    @property
    def aspect_ratio(self) -> float:
        """Соотношение сторон исходника: ширина / высота."""
        return self.width / self.height

    @property
    def display_name(self) -> str:
        return self.path.name if self.path is not None else "—"
