"""Контроллер приложения: оркестрация UI и сессии изменения размера.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без расчётов размеров и геометрии).
- DIP: вся прикладная логика инкапсулирована в `ResizeSession`.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Final, Optional

import customtkinter as ctk

from resizer.models.image_model import ImageData
from resizer.models.resize_model import (
    FillMode,
    HeightEdited,
    LoadState,
    LockToggled,
    OutputFormat,
    WidthEdited,
)
from resizer.services.image_service import ImageService
from resizer.services.session_service import ResizeSession
from resizer.ui.image_viewer import ImageViewer
from resizer.ui.sidebar import Sidebar
from resizer.ui.bottom_bar import BottomBar

logger: Final = logging.getLogger(__name__)

_POLL_MS = 50


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Фоновое декодирование изображений через `ImageService`.
    - Передача правок и действий пользователя в `ResizeSession`.
    - Синхронизация доступности кнопок с состоянием загрузки.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _session: ResizeSession = field(default_factory=ResizeSession)
    _executor: ThreadPoolExecutor = field(default_factory=lambda: ThreadPoolExecutor(max_workers=1))
    _pending: Optional[Future] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_width_change = self._handle_width_change
        self.sidebar.on_height_change = self._handle_height_change
        self.sidebar.on_lock_change = self._handle_lock_change
        self.sidebar.on_fill_mode_change = self._handle_fill_mode_change
        self.sidebar.on_format_change = self._handle_format_change

        self.bottom.on_resize = self._handle_resize
        self.bottom.on_save = self._handle_save

        self._sync_actions()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        if self._session.state is LoadState.LOADING:
            return
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.load_file(file_path)

    def load_file(self, file_path: str | Path) -> None:
        """Запускает декодирование в фоне; до завершения действия недоступны."""
        self._session.begin_load()
        self.viewer.set_image(None)
        self.viewer.set_placeholder("Загрузка…")
        self.bottom.set_status(f"Загрузка {Path(file_path).name}…")
        self.bottom.set_busy(True)
        self._sync_actions()

        self._pending = self._executor.submit(self._image_service.load_image, file_path)
        self.window.after(_POLL_MS, self._poll_load)

    def _poll_load(self) -> None:
        future = self._pending
        if future is None:
            return
        if not future.done():
            self.window.after(_POLL_MS, self._poll_load)
            return
        self._pending = None
        self.bottom.set_busy(False)
        try:
            image_data = future.result()
        except Exception as exc:
            # любая ошибка декодирования завершает загрузку состоянием FAILED
            self._on_load_failed(exc)
            return
        self._on_loaded(image_data)

    def _on_loaded(self, image_data: ImageData) -> None:
        self._session.complete_load(image_data)
        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self.sidebar.set_target_spec(self._session.spec)
        self.bottom.set_status(f"Загружено: {image_data.display_name}, {image_data.width} × {image_data.height}")
        self._sync_actions()

    def _on_load_failed(self, exc: Exception) -> None:
        logger.error("Cannot open image: %s", exc)
        self._session.fail_load(exc)
        self.viewer.set_placeholder("Не удалось открыть изображение")
        self.sidebar.set_image_info(None)
        self.bottom.set_status(f"Ошибка: {exc}", error=True)
        self._sync_actions()

    def _handle_width_change(self, raw: str) -> None:
        spec = self._session.edit(WidthEdited(raw))
        self.sidebar.set_target_spec(spec, skip="width")

    def _handle_height_change(self, raw: str) -> None:
        spec = self._session.edit(HeightEdited(raw))
        self.sidebar.set_target_spec(spec, skip="height")

    def _handle_lock_change(self, enabled: bool) -> None:
        self._session.edit(LockToggled(enabled))

    def _handle_fill_mode_change(self, mode: FillMode) -> None:
        self._session.set_fill_mode(mode)

    def _handle_format_change(self, fmt: OutputFormat) -> None:
        self._session.set_output_format(fmt)

    def _handle_resize(self) -> None:
        surface = self._session.resize()
        if surface is None:
            self.bottom.set_status("Укажите ширину и высоту", error=True)
            return
        self.viewer.set_result_image(surface)
        self.sidebar.set_target_spec(self._session.spec)
        self.bottom.set_status(f"Результат: {surface.width} × {surface.height}, {self._session.fill_mode.label}")
        self._sync_actions()

    def _handle_save(self) -> None:
        if not self._session.can_export:
            return
        fmt = self._session.output_format
        try:
            target = filedialog.asksaveasfilename(
                title="Сохранить изображение",
                initialfile=self._session.export_filename(),
                defaultextension=f".{fmt.extension}",
                filetypes=((fmt.label, f"*.{fmt.extension}"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not target:
            return

        try:
            path = self._session.export(target)
        except OSError as exc:
            logger.exception("Export to %s failed", target)
            self.bottom.set_status(f"Ошибка сохранения: {exc}", error=True)
            return
        if path is not None:
            self.bottom.set_status(f"Сохранено: {path}")

    # ---- Helpers ----
    def _sync_actions(self) -> None:
        loading = self._session.state is LoadState.LOADING
        self.sidebar.set_open_enabled(not loading)
        self.bottom.set_actions_enabled(resize=self._session.can_resize, save=self._session.can_export)
