"""Кодирование холста в файл выбранного формата."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Dict, Final

from PIL import Image

from resizer.constants import EXPORT_STEM, JPEG_QUALITY
from resizer.models.resize_model import OutputFormat

logger: Final = logging.getLogger(__name__)


class ExportService:
    def export_filename(self, fmt: OutputFormat | str) -> str:
        """Имя файла по умолчанию: `resized-image.<ext>`."""
        return f"{EXPORT_STEM}.{OutputFormat(fmt).extension}"

    def encode(self, surface: Image.Image, fmt: OutputFormat | str) -> bytes:
        """Кодирует холст в байты.

        JPEG сохраняется с качеством 95 (альфа-канал отбрасывается),
        WebP без потерь, PNG с настройками по умолчанию.
        """
        fmt = OutputFormat(fmt)
        image = surface
        if fmt is OutputFormat.JPG and image.mode != "RGB":
            image = image.convert("RGB")

        buf = io.BytesIO()
        image.save(buf, format=fmt.pil_format, **self._save_options(fmt))
        return buf.getvalue()

    def save(self, surface: Image.Image, fmt: OutputFormat | str, target: str | Path) -> Path:
        """Записывает закодированный холст на диск.

        Args:
            surface: Готовый холст.
            fmt: Формат файла.
            target: Путь к файлу или каталог (тогда имя берётся из `export_filename`).

        Returns:
            Путь к записанному файлу.
        """
        path = Path(target)
        if path.is_dir():
            path = path / self.export_filename(fmt)
        data = self.encode(surface, fmt)
        path.write_bytes(data)
        logger.info("Exported %dx%d %s to %s (%d bytes)", surface.width, surface.height, OutputFormat(fmt).label, path, len(data))
        return path

    def _save_options(self, fmt: OutputFormat) -> Dict[str, Any]:
        if fmt is OutputFormat.JPG:
            return {"quality": JPEG_QUALITY}
        if fmt is OutputFormat.WEBP:
            return {"lossless": True}
        return {}
