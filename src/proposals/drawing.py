"""PDF surface primitives and the ReportLab backend behind them."""

from __future__ import annotations

import io
from typing import Any, Protocol

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


class PdfSurface(Protocol):
    """Backend-agnostic page surface used by the page emitter."""

    def set_title(self, title: str) -> None: ...
    def set_fill_color(self, color: Any) -> None: ...
    def set_font(self, font_name: str, size: float) -> None: ...
    def draw_string(self, x: float, y: float, text: str) -> None: ...
    def draw_right_string(self, x: float, y: float, text: str) -> None: ...
    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None: ...
    def show_page(self) -> None: ...
    def finish(self) -> bytes: ...


class ReportLabSurface:
    """ReportLab-backed implementation of PdfSurface writing to memory."""

    def __init__(self, *, pagesize: tuple[float, float]) -> None:
        self._buffer = io.BytesIO()
        self._target = canvas.Canvas(self._buffer, pagesize=pagesize)

    def set_title(self, title: str) -> None:
        self._target.setTitle(title)

    def set_fill_color(self, color: Any) -> None:
        self._target.setFillColor(color)

    def set_font(self, font_name: str, size: float) -> None:
        self._target.setFont(font_name, size)

    def draw_string(self, x: float, y: float, text: str) -> None:
        self._target.drawString(x, y, text)

    def draw_right_string(self, x: float, y: float, text: str) -> None:
        self._target.drawRightString(x, y, text)

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        self._target.drawImage(ImageReader(image), x, y, width=width, height=height)

    def show_page(self) -> None:
        self._target.showPage()

    def finish(self) -> bytes:
        self._target.save()
        return self._buffer.getvalue()


def create_reportlab_surface(*, pagesize: tuple[float, float]) -> ReportLabSurface:
    """Create an in-memory ReportLab surface."""
    return ReportLabSurface(pagesize=pagesize)
