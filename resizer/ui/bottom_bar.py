from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_resize: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)  # status stretches

        self._status_value = ctk.StringVar(value="Изображение не загружено")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status_value, anchor="w")
        self._status_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")

        self._progress = ctk.CTkProgressBar(self, mode="indeterminate", width=120)
        self._toggle_progress(visible=False)

        self._resize_btn = ctk.CTkButton(self, text="Изменить размер", command=self._emit_resize, state="disabled")
        self._resize_btn.grid(row=0, column=2, padx=6, pady=8, sticky="e")

        self._save_btn = ctk.CTkButton(self, text="Сохранить…", command=self._emit_save, state="disabled")
        self._save_btn.grid(row=0, column=3, padx=(6, 10), pady=8, sticky="e")

    # public API (sync from controller)
    def set_status(self, text: str, error: bool = False) -> None:
        self._status_value.set(text)
        self._status_label.configure(text_color="#d9534f" if error else ("gray10", "gray90"))

    def set_busy(self, busy: bool) -> None:
        self._toggle_progress(visible=busy)

    def set_actions_enabled(self, resize: bool, save: bool) -> None:
        self._resize_btn.configure(state="normal" if resize else "disabled")
        self._save_btn.configure(state="normal" if save else "disabled")

    # events
    def _emit_resize(self) -> None:
        if self.on_resize:
            self.on_resize()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    # helpers
    def _toggle_progress(self, visible: bool) -> None:
        if visible:
            self._progress.grid(row=0, column=1, padx=6, pady=8, sticky="e")
            self._progress.start()
        else:
            self._progress.stop()
            self._progress.grid_remove()
