"""Per-block rasterization of a laid-out view tree with Pillow."""

from __future__ import annotations

import asyncio
import copy
import io
import logging
import math
import urllib.request
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from PIL import Image, ImageDraw

from ..config import RESOURCE_TIMEOUT_SECONDS
from ..view.fonts import FontBook
from ..view.layout import line_height
from ..view.nodes import Box, ViewNode
from .errors import RasterError, RasterTimeoutError
from .extractor import Block

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

# DecompressionBombError is not an OSError.
_RASTER_FAILURES = (OSError, ValueError, MemoryError, Image.DecompressionBombError)


@dataclass(frozen=True)
class RasterImage:
    """Pixels for one block, ``pixel_width`` x ``pixel_height`` RGB."""

    pixel_width: int
    pixel_height: int
    image: Image.Image

    @property
    def pixel_data(self) -> bytes:
        return self.image.tobytes()


def to_rgb(color: Any) -> RGB:
    """Convert a ReportLab color (or an RGB tuple) into 8-bit Pillow channels."""
    if isinstance(color, tuple):
        return (int(color[0]), int(color[1]), int(color[2]))
    return (
        round(color.red * 255),
        round(color.green * 255),
        round(color.blue * 255),
    )


def raster_height(block: Block, density: int) -> int:
    """Block height in pixels, rounded up so the last row is never clipped."""
    return math.ceil(block.height * density)


@contextmanager
def detached_clone(root: ViewNode) -> Iterator[ViewNode]:
    """Yield a private deep copy of ``root`` and drop it when the block exits."""
    clone = copy.deepcopy(root)
    try:
        yield clone
    finally:
        clone.children = []
        clone.box = None
        logger.debug("disposed detached view clone")


class ResourceLoader:
    """Load images referenced by ``img`` nodes, once per pagination pass.

    ``http``/``https`` sources are fetched with ``urllib``; anything else is a
    filesystem path, resolved against ``asset_root`` when relative. Every
    load runs in a worker thread and is bounded by ``timeout`` seconds.
    """

    def __init__(self, *, asset_root: str | Path | None = None, timeout: float = RESOURCE_TIMEOUT_SECONDS) -> None:
        if timeout <= 0:
            msg = "resource timeout must be positive."
            raise ValueError(msg)
        self.asset_root = Path(asset_root) if asset_root is not None else None
        self.timeout = timeout
        self._cache: dict[str, Image.Image] = {}

    def _read_bytes(self, src: str) -> bytes:
        scheme = urlparse(src).scheme
        if scheme in ("http", "https"):
            with urllib.request.urlopen(src, timeout=self.timeout) as response:  # noqa: S310
                return response.read()
        path = Path(urlparse(src).path) if scheme == "file" else Path(src)
        if not path.is_absolute() and self.asset_root is not None:
            path = self.asset_root / path
        return path.read_bytes()

    def _decode(self, src: str) -> Image.Image:
        with Image.open(io.BytesIO(self._read_bytes(src))) as opened:
            opened.load()
            return opened.convert("RGBA")

    async def load(self, src: str) -> Image.Image:
        cached = self._cache.get(src)
        if cached is not None:
            return cached
        loaded = await asyncio.wait_for(asyncio.to_thread(self._decode, src), timeout=self.timeout)
        self._cache[src] = loaded
        return loaded


class BlockPainter:
    """Paint one block of a laid-out tree onto its own canvas."""

    def __init__(self, *, fonts: FontBook, background: Any, density: int, width: float, origin_left: float) -> None:
        self.fonts = fonts
        self.background = to_rgb(background)
        self.density = density
        self.width_px = math.ceil(width * density)
        self.origin_left = origin_left

    def _rect(self, box: Box, origin_top: float) -> tuple[float, float, float, float] | None:
        x0 = (box.left - self.origin_left) * self.density
        y0 = (box.top - origin_top) * self.density
        x1 = x0 + box.width * self.density - 1
        y1 = y0 + box.height * self.density - 1
        if x1 < x0 or y1 < y0:
            return None
        return (x0, y0, x1, y1)

    def _paint_box(self, draw: ImageDraw.ImageDraw, node: ViewNode, origin_top: float) -> None:
        style = node.style
        if node.box is None or (style.background is None and style.border_color is None):
            return
        rect = self._rect(node.box, origin_top)
        if rect is None:
            return
        fill = to_rgb(style.background) if style.background is not None else None
        outline = to_rgb(style.border_color) if style.border_color is not None else None
        border = round(style.border_width * self.density) if outline is not None else 0
        if style.radius > 0:
            draw.rounded_rectangle(rect, radius=style.radius * self.density, fill=fill, outline=outline, width=border)
        else:
            draw.rectangle(rect, fill=fill, outline=outline, width=border)

    def _paint_text(self, draw: ImageDraw.ImageDraw, node: ViewNode, box: Box, origin_top: float) -> None:
        style = node.style
        font = self.fonts.font(style.font_size, bold=style.bold)
        fill = to_rgb(style.color) if style.color is not None else (0, 0, 0)
        step = line_height(node) * self.density
        leading = (line_height(node) - style.font_size) * self.density / 2
        content_left = (box.left + style.padding_x - self.origin_left) * self.density
        content_width = (box.width - 2 * style.padding_x) * self.density
        top = (box.top + style.padding_y - origin_top) * self.density
        for idx, line in enumerate(node.lines):
            advance = font.getlength(line)
            if style.align == "right":
                x = content_left + content_width - advance
            elif style.align == "center":
                x = content_left + (content_width - advance) / 2
            else:
                x = content_left
            y = top + idx * step + leading
            draw.text((x, y), line, font=font, fill=fill)
            if style.strike:
                middle = y + style.font_size * self.density * 0.55
                draw.line((x, middle, x + advance, middle), fill=fill, width=max(1, self.density // 2))

    def _paint_image(
        self, canvas: Image.Image, box: Box, src: str, origin_top: float, images: dict[str, Image.Image]
    ) -> None:
        size = (round(box.width * self.density), round(box.height * self.density))
        if size[0] < 1 or size[1] < 1:
            return
        resized = images[src].resize(size, Image.Resampling.LANCZOS)
        position = (
            round((box.left - self.origin_left) * self.density),
            round((box.top - origin_top) * self.density),
        )
        canvas.paste(resized, position, resized)

    def paint(self, root: ViewNode, block: Block, images: dict[str, Image.Image]) -> RasterImage:
        if root.box is None:
            msg = "view tree must be laid out before rasterization."
            raise ValueError(msg)
        height_px = raster_height(block, self.density)
        canvas = Image.new("RGB", (self.width_px, height_px), self.background)
        draw = ImageDraw.Draw(canvas)
        origin_top = root.box.top + block.vertical_start

        # Ancestor backgrounds first so section fills survive per-block cropping.
        for ancestor in root.ancestors_of(block.path):
            self._paint_box(draw, ancestor, origin_top)

        for node in root.resolve(block.path).walk():
            if node.box is None:
                continue
            self._paint_box(draw, node, origin_top)
            if node.src is not None:
                self._paint_image(canvas, node.box, node.src, origin_top, images)
            elif node.lines:
                self._paint_text(draw, node, node.box, origin_top)
        return RasterImage(pixel_width=self.width_px, pixel_height=height_px, image=canvas)


def _is_timeout(exc: BaseException) -> bool:
    return isinstance(exc, (asyncio.TimeoutError, TimeoutError)) or isinstance(
        getattr(exc, "reason", None), TimeoutError
    )


async def _load_block_images(node: ViewNode, loader: ResourceLoader, index: int) -> dict[str, Image.Image]:
    images: dict[str, Image.Image] = {}
    for child in node.walk():
        if child.src is None or child.src in images:
            continue
        try:
            images[child.src] = await loader.load(child.src)
        except (asyncio.TimeoutError, *_RASTER_FAILURES) as exc:
            if _is_timeout(exc):
                msg = f"timed out loading '{child.src}' for block {index}."
                raise RasterTimeoutError(msg, block_index=index) from exc
            msg = f"could not load '{child.src}' for block {index}: {exc}"
            raise RasterError(msg, block_index=index) from exc
    return images


async def rasterize_blocks(
    root: ViewNode,
    blocks: Sequence[Block],
    *,
    width: float,
    density: int,
    background: Any,
    fonts: FontBook,
    loader: ResourceLoader | None = None,
) -> list[RasterImage]:
    """Rasterize every block in order on a detached copy of ``root``.

    Block ``n + 1`` is not started until block ``n``'s raster exists. Any
    failure aborts the whole pass with :class:`RasterError`.
    """
    if width <= 0:
        msg = "raster width must be positive."
        raise ValueError(msg)
    if density < 1:
        msg = "density must be >= 1."
        raise ValueError(msg)
    if fonts.density != density:
        msg = "font book density must match the raster density."
        raise ValueError(msg)
    if getattr(background, "alpha", 1) != 1:
        msg = "raster background must be opaque."
        raise ValueError(msg)
    if root.box is None:
        msg = "view tree must be laid out before rasterization."
        raise ValueError(msg)

    loader = loader or ResourceLoader()
    painter = BlockPainter(
        fonts=fonts,
        background=background,
        density=density,
        width=width,
        origin_left=root.box.left,
    )
    rasters: list[RasterImage] = []
    with detached_clone(root) as clone:
        for index, block in enumerate(blocks):
            images = await _load_block_images(clone.resolve(block.path), loader, index)
            try:
                raster = await asyncio.to_thread(painter.paint, clone, block, images)
            except _RASTER_FAILURES as exc:
                msg = f"could not rasterize block {index}: {exc}"
                raise RasterError(msg, block_index=index) from exc
            logger.debug("rasterized block %d at %dx%d", index, raster.pixel_width, raster.pixel_height)
            rasters.append(raster)
    return rasters
