"""Сессия изменения размера: текущее изображение, параметры и готовый холст.

Принципы:
- SRP: оркестрация загрузка -> размеры -> геометрия -> отрисовка -> кодирование
  без знания об UI; виджеты общаются с сессией через контроллер.
- Изображение и холст принадлежат сессии и заменяются целиком.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Optional, Tuple

from PIL import Image

from resizer.models.image_model import ImageData
from resizer.models.resize_model import (
    FillMode,
    ImageLoaded,
    LoadState,
    OutputFormat,
    SpecEdit,
    TargetSpec,
)
from resizer.services.compositor_service import CompositorService
from resizer.services.dimension_service import DimensionService
from resizer.services.export_service import ExportService
from resizer.services.render_service import RenderService

logger: Final = logging.getLogger(__name__)


class ResizeSession:
    """Состояние одного окна приложения.

    Ответственности:
    - Переходы состояния загрузки (EMPTY -> LOADING -> READY | FAILED).
    - Применение правок пользователя к `TargetSpec` через редьюсер.
    - Изменение размера и экспорт, которые без изображения ничего не делают.
    """

    def __init__(
        self,
        dimensions: Optional[DimensionService] = None,
        compositor: Optional[CompositorService] = None,
        renderer: Optional[RenderService] = None,
        exporter: Optional[ExportService] = None,
    ) -> None:
        self._dimensions = dimensions or DimensionService()
        self._compositor = compositor or CompositorService()
        self._renderer = renderer or RenderService()
        self._exporter = exporter or ExportService()

        self.state: LoadState = LoadState.EMPTY
        self.image: Optional[ImageData] = None
        self.spec: TargetSpec = TargetSpec()
        self.fill_mode: FillMode = FillMode.STRETCH
        self.output_format: OutputFormat = OutputFormat.PNG
        self.surface: Optional[Image.Image] = None
        self.error: Optional[Exception] = None

    # ---- Load lifecycle ----
    def begin_load(self) -> None:
        self.state = LoadState.LOADING
        self.error = None

    def complete_load(self, image: ImageData) -> None:
        """Делает `image` текущим исходником; прежний холст сбрасывается."""
        self.image = image
        self.surface = None
        self.error = None
        self.state = LoadState.READY
        self.spec = self._dimensions.reduce(self.spec, ImageLoaded(image.width, image.height), image.aspect_ratio)

    def fail_load(self, error: Exception) -> None:
        # предыдущее изображение не восстанавливается: нужна новая попытка загрузки
        logger.warning("Image load failed: %s", error)
        self.image = None
        self.surface = None
        self.error = error
        self.state = LoadState.FAILED

    # ---- Parameters ----
    @property
    def source_aspect(self) -> Optional[float]:
        return self.image.aspect_ratio if self.image is not None else None

    def edit(self, edit: SpecEdit) -> TargetSpec:
        self.spec = self._dimensions.reduce(self.spec, edit, self.source_aspect)
        return self.spec

    def set_fill_mode(self, mode: FillMode | str) -> None:
        self.fill_mode = FillMode(mode)

    def set_output_format(self, fmt: OutputFormat | str) -> None:
        self.output_format = OutputFormat(fmt)

    @property
    def can_resize(self) -> bool:
        return self.state is LoadState.READY and self.image is not None

    @property
    def can_export(self) -> bool:
        return self.can_resize and self.surface is not None

    def resolved_size(self) -> Tuple[int, int]:
        return self._dimensions.resolve(
            self.spec.width,
            self.spec.height,
            self.spec.lock_aspect,
            self.source_aspect,
        )

    # ---- Actions ----
    def resize(self) -> Optional[Image.Image]:
        """Рисует исходник на новом холсте итогового размера.

        Returns:
            Холст или None, если изображения нет либо размер не определён.
        """
        if not self.can_resize or self.image is None:
            return None
        width, height = self.resolved_size()
        if width <= 0 or height <= 0:
            logger.info("Resize skipped: unresolved size %dx%d", width, height)
            return None

        plan = self._compositor.plan(self.image.width, self.image.height, width, height, self.fill_mode)
        self.surface = self._renderer.render(self.image.pil_image, plan, (width, height))
        self.spec = TargetSpec(width=width, height=height, lock_aspect=self.spec.lock_aspect)
        logger.info(
            "Resized %dx%d -> %dx%d (%s)", self.image.width, self.image.height, width, height, self.fill_mode.value
        )
        return self.surface

    def encode(self) -> Optional[bytes]:
        if not self.can_export or self.surface is None:
            return None
        return self._exporter.encode(self.surface, self.output_format)

    def export(self, target: str | Path) -> Optional[Path]:
        if not self.can_export or self.surface is None:
            return None
        return self._exporter.save(self.surface, self.output_format, target)

    def export_filename(self) -> str:
        return self._exporter.export_filename(self.output_format)
