"""Константы приложения: пределы размеров, параметры кодирования и отрисовки."""
from __future__ import annotations

from typing import Final, Tuple

from PIL import Image

# Допустимый диапазон ширины/высоты результата, px
MIN_SIZE: Final[int] = 1
MAX_SIZE: Final[int] = 5000

# Экспорт: имя файла без расширения и качество JPEG
EXPORT_STEM: Final[str] = "resized-image"
JPEG_QUALITY: Final[int] = 95

# Фон режима «Вписать» (непрозрачный белый)
FIT_BACKGROUND: Final[Tuple[int, int, int, int]] = (255, 255, 255, 255)

# Ресэмплинг при отрисовке результата
RESAMPLE: Final = Image.Resampling.LANCZOS

# Превью оригинала не меньше этого размера по каждой стороне
PREVIEW_MIN_SIZE: Final[int] = 200
