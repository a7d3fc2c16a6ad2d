"""Виджет предпросмотра: исходник и результат рядом («2-up»).

Принципы:
- SRP: отвечает только за представление изображений, не за их обработку.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from resizer.constants import PREVIEW_MIN_SIZE

_GAP = 16
_CAPTION_H = 24


def preview_scale(image_size: Tuple[int, int], box_size: Tuple[int, int]) -> float:
    """Масштаб превью: вписать в `box_size`, мелкие изображения подтянуть до `PREVIEW_MIN_SIZE`."""
    img_w, img_h = image_size
    box_w, box_h = box_size
    if img_w <= 0 or img_h <= 0:
        return 1.0
    fit = min(box_w / img_w, box_h / img_h)
    floor = max(1.0, PREVIEW_MIN_SIZE / min(img_w, img_h))
    return max(0.01, min(fit, floor))


class ImageViewer(ctk.CTkFrame):
    """Канва с двумя панелями: «Исходник» слева, «Результат» справа."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._original_image: Optional[Image.Image] = None
        self._result_image: Optional[Image.Image] = None
        self._tk_image_before: Optional[ImageTk.PhotoImage] = None
        self._tk_image_after: Optional[ImageTk.PhotoImage] = None
        self._placeholder: str = "Откройте изображение"

        self._canvas.bind("<Configure>", self._on_canvas_resize)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Устанавливает исходное изображение и сбрасывает результат."""
        self._original_image = image
        self._result_image = None
        self._render()

    def set_result_image(self, image: Optional[Image.Image]) -> None:
        """Устанавливает холст результата (может быть None) и перерисовывает виджет."""
        self._result_image = image
        self._render()

    def set_placeholder(self, text: str) -> None:
        """Текст, который показывается, пока исходника нет (загрузка, ошибка)."""
        self._placeholder = text
        if self._original_image is None:
            self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._render()

    def _render(self) -> None:
        self._canvas.delete("all")
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        text_color = self._get_text_color()

        if self._original_image is None:
            self._canvas.create_text(canvas_w // 2, canvas_h // 2, text=self._placeholder, fill=text_color)
            return

        panel_w = max(1, (canvas_w - _GAP) // 2)
        panel_h = max(1, canvas_h - _CAPTION_H)

        self._tk_image_before = self._draw_panel(0, panel_w, panel_h, self._original_image, "Исходник", text_color)
        after_x = panel_w + _GAP
        if self._result_image is None:
            self._canvas.create_text(
                after_x + panel_w // 2, _CAPTION_H + panel_h // 2, text="Нажмите «Изменить размер»", fill=text_color
            )
            self._tk_image_after = None
            return
        self._tk_image_after = self._draw_panel(after_x, panel_w, panel_h, self._result_image, "Результат", text_color)

    def _draw_panel(
        self, x: int, panel_w: int, panel_h: int, image: Image.Image, caption: str, text_color: str
    ) -> ImageTk.PhotoImage:
        img_w, img_h = image.size
        scale = preview_scale((img_w, img_h), (panel_w, panel_h))
        scaled_w = max(1, int(img_w * scale))
        scaled_h = max(1, int(img_h * scale))
        resized = image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

        self._canvas.create_text(x + 6, 4, text=f"{caption}: {img_w} × {img_h}", anchor="nw", fill=text_color)
        ox = x + max(0, (panel_w - scaled_w) // 2)
        oy = _CAPTION_H + max(0, (panel_h - scaled_h) // 2)
        tk_image = ImageTk.PhotoImage(resized)
        self._canvas.create_image(ox, oy, image=tk_image, anchor="nw")
        # PhotoImage must stay referenced or Tk drops it
        return tk_image

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _get_text_color(self) -> str:
        return "#d0d0d0" if ctk.get_appearance_mode().lower() == "dark" else "#303030"
