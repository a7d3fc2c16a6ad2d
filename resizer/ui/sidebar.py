"""Боковая панель: открытие файла, информация об исходнике, параметры размера.

Принципы:
- SRP: управляет только UI параметров, не содержит расчётов.
- ISP: принимает состояние через методы `set_*`, события отдаёт через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from resizer.constants import MAX_SIZE, MIN_SIZE
from resizer.models.image_model import ImageData
from resizer.models.resize_model import FillMode, OutputFormat, TargetSpec


def _format_size_bytes(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} Б"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} КБ"
    return f"{size_bytes / (1024 * 1024):.2f} МБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, размеры, вывод."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_width_change: Optional[Callable[[str], None]] = None
        self.on_height_change: Optional[Callable[[str], None]] = None
        self.on_lock_change: Optional[Callable[[bool], None]] = None
        self.on_fill_mode_change: Optional[Callable[[FillMode], None]] = None
        self.on_format_change: Optional[Callable[[OutputFormat], None]] = None

        # guards programmatic updates from echoing back as user edits
        self._syncing = False

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, columnspan=2, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=6, column=0, columnspan=2, padx=8, pady=(0, 10), sticky="ew")

        # Size section
        self._size_title = ctk.CTkLabel(self, text="Размер результата", font=ctk.CTkFont(size=16, weight="bold"))
        self._size_title.grid(row=7, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._width_val = ctk.StringVar(value="")
        self._height_val = ctk.StringVar(value="")
        self._width_label = ctk.CTkLabel(self, text=f"Ширина ({MIN_SIZE}–{MAX_SIZE}):")
        self._height_label = ctk.CTkLabel(self, text=f"Высота ({MIN_SIZE}–{MAX_SIZE}):")
        self._width_entry = ctk.CTkEntry(self, textvariable=self._width_val, width=100)
        self._height_entry = ctk.CTkEntry(self, textvariable=self._height_val, width=100)
        self._width_label.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="w")
        self._width_entry.grid(row=8, column=1, padx=8, pady=(0, 2), sticky="ew")
        self._height_label.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="w")
        self._height_entry.grid(row=9, column=1, padx=8, pady=(0, 6), sticky="ew")
        self._width_val.trace_add("write", self._on_width_write)
        self._height_val.trace_add("write", self._on_height_write)

        self._lock_val = ctk.BooleanVar(value=False)
        self._lock_check = ctk.CTkCheckBox(
            self,
            text="Сохранять пропорции",
            variable=self._lock_val,
            onvalue=True,
            offvalue=False,
            command=self._emit_lock_change,
        )
        self._lock_check.grid(row=10, column=0, columnspan=2, padx=8, pady=(0, 10), sticky="w")

        # Output section
        self._output_title = ctk.CTkLabel(self, text="Вывод", font=ctk.CTkFont(size=16, weight="bold"))
        self._output_title.grid(row=11, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._fill_label = ctk.CTkLabel(self, text="Заполнение:")
        self._fill_menu = ctk.CTkOptionMenu(
            self, values=[mode.label for mode in FillMode], command=self._emit_fill_mode_change
        )
        self._fill_menu.set(FillMode.STRETCH.label)
        self._fill_label.grid(row=12, column=0, padx=8, pady=(0, 4), sticky="w")
        self._fill_menu.grid(row=12, column=1, padx=8, pady=(0, 4), sticky="ew")

        self._format_label = ctk.CTkLabel(self, text="Формат:")
        self._format_menu = ctk.CTkOptionMenu(
            self, values=[fmt.label for fmt in OutputFormat], command=self._emit_format_change
        )
        self._format_menu.set(OutputFormat.PNG.label)
        self._format_label.grid(row=13, column=0, padx=8, pady=(0, 8), sticky="w")
        self._format_menu.grid(row=13, column=1, padx=8, pady=(0, 8), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, data: Optional[ImageData]) -> None:
        """Показывает путь, размер файла, разрешение и режим исходника."""
        if data is None:
            for var in (self._path_val, self._size_val, self._dims_val, self._mode_val):
                var.set("—")
            return
        self._path_val.set(f"Файл: {data.path if data.path is not None else '—'}")
        self._size_val.set(f"Размер: {_format_size_bytes(data.size_bytes)}")
        self._dims_val.set(f"Разрешение: {data.width} × {data.height}")
        self._mode_val.set(f"Режим: {data.mode}")

    def set_target_spec(self, spec: TargetSpec, skip: Optional[str] = None) -> None:
        """Синхронизирует поля с `TargetSpec` без генерации событий правки.

        Args:
            spec: Актуальные параметры.
            skip: "width" | "height", поле, которое пользователь сейчас редактирует.
        """
        self._syncing = True
        try:
            width_text = "" if spec.width is None else str(spec.width)
            height_text = "" if spec.height is None else str(spec.height)
            if skip != "width" and self._width_val.get() != width_text:
                self._width_val.set(width_text)
            if skip != "height" and self._height_val.get() != height_text:
                self._height_val.set(height_text)
            self._lock_val.set(spec.lock_aspect)
        finally:
            self._syncing = False

    def set_open_enabled(self, enabled: bool) -> None:
        self._open_btn.configure(state="normal" if enabled else "disabled")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _on_width_write(self, *_args: object) -> None:
        if not self._syncing and self.on_width_change:
            self.on_width_change(self._width_val.get())

    def _on_height_write(self, *_args: object) -> None:
        if not self._syncing and self.on_height_change:
            self.on_height_change(self._height_val.get())

    def _emit_lock_change(self) -> None:
        if self.on_lock_change:
            self.on_lock_change(bool(self._lock_val.get()))

    def _emit_fill_mode_change(self, value: str) -> None:
        if self.on_fill_mode_change:
            self.on_fill_mode_change(FillMode.from_label(value))

    def _emit_format_change(self, value: str) -> None:
        if self.on_format_change:
            self.on_format_change(OutputFormat.from_label(value))
