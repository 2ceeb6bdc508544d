"""Pillow font lookup shared by layout measurement and rasterization."""

from __future__ import annotations

import logging

from PIL import ImageFont

from ..config import Theme

logger = logging.getLogger(__name__)

PillowFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontBook:
    """Cache of Pillow fonts keyed by pixel size and weight.

    Fonts are opened at ``size * density`` so text measured during layout
    matches what the rasterizer later draws. Widths are reported back in
    view pixels.
    """

    def __init__(self, *, regular: str, bold: str, density: int = 1) -> None:
        if density < 1:
            msg = "density must be >= 1."
            raise ValueError(msg)
        self.density = density
        self._paths = {False: regular, True: bold}
        self._cache: dict[tuple[int, bool], PillowFont] = {}

    @classmethod
    def from_theme(cls, theme: type = Theme, *, density: int = 1) -> FontBook:
        return cls(regular=theme.FONT_REGULAR, bold=theme.FONT_BOLD, density=density)

    def font(self, size: float, *, bold: bool = False) -> PillowFont:
        """Return the font to draw ``size`` view-pixel text at raster density."""
        pixel_size = max(1, round(size * self.density))
        key = (pixel_size, bold)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        path = self._paths[bold]
        try:
            loaded: PillowFont = ImageFont.truetype(path, pixel_size)
        except OSError:
            logger.debug("font %s unavailable, using Pillow's default face", path)
            loaded = ImageFont.load_default(size=pixel_size)
        self._cache[key] = loaded
        return loaded

    def text_width(self, value: str, size: float, *, bold: bool = False) -> float:
        """Return the advance width of ``value`` in view pixels."""
        return self.font(size, bold=bold).getlength(value) / self.density
