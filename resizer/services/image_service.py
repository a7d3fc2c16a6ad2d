"""Загрузка изображений с диска или из памяти и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за декодирование и базовое извлечение свойств.
- Возвращает `ImageData` с предсказуемыми полями; ошибки декодирования типизированы.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Final, Optional

from PIL import Image, UnidentifiedImageError

from resizer.models.image_model import ImageData

logger: Final = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Содержимое не удалось декодировать как растровое изображение."""


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ImageDecodeError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        with path.open("rb") as fh:
            image_data = self._decode(fh, path=path, size_bytes=size_bytes)
        logger.info("Loaded %s (%dx%d, %s)", path, image_data.width, image_data.height, image_data.mode)
        return image_data

    def load_image_bytes(self, data: bytes, name: Optional[str] = None) -> ImageData:
        """Декодирует изображение из байтового буфера (например, перетаскивание)."""
        path = Path(name) if name else None
        image_data = self._decode(io.BytesIO(data), path=path, size_bytes=len(data))
        logger.info("Decoded %d bytes (%dx%d)", len(data), image_data.width, image_data.height)
        return image_data

    def _decode(self, stream: io.BufferedIOBase, path: Optional[Path], size_bytes: Optional[int]) -> ImageData:
        label = path if path is not None else "<bytes>"
        try:
            with Image.open(stream) as opened:
                source_mode = opened.mode
                pil_image = opened.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
            # PIL сообщает о битых файлах через OSError, SyntaxError (чанки PNG) и ValueError (заголовки)
            raise ImageDecodeError(f"Файл не является изображением: {label}") from exc

        width, height = pil_image.size
        if width <= 0 or height <= 0:
            raise ImageDecodeError(f"Пустое изображение: {label}")

        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=source_mode,
            size_bytes=size_bytes,
        )
