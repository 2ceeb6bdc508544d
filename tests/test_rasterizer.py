"""Tests for per-block rasterization."""

from __future__ import annotations

import asyncio
import tempfile
import unittest
from pathlib import Path

from PIL import Image
from reportlab.lib import colors

from proposals.config import Theme
from proposals.pagination import (
    RasterError,
    RasterTimeoutError,
    ResourceLoader,
    detached_clone,
    extract_blocks,
    rasterize_blocks,
)
from proposals.view import FontBook, Style, div, image, layout_view, spacer, text

_WIDTH = 100
_DENSITY = 2


def _laid_out(root):
    layout_view(root, width=_WIDTH, fonts=FontBook.from_theme(Theme, density=_DENSITY))
    return root


async def _rasterize(root, **kwargs):
    blocks = extract_blocks(root)
    options = {
        "width": _WIDTH,
        "density": _DENSITY,
        "background": colors.white,
        "fonts": FontBook.from_theme(Theme, density=_DENSITY),
    }
    options.update(kwargs)
    return await rasterize_blocks(root, blocks, **options)


class _TimingOutLoader(ResourceLoader):
    async def load(self, src: str) -> Image.Image:
        raise asyncio.TimeoutError


class RasterizeBlocksTests(unittest.IsolatedAsyncioTestCase):
    async def test_one_raster_per_block_at_density(self) -> None:
        root = _laid_out(
            div(
                div(spacer(25), style=Style(background=colors.HexColor("#FF0000")), block=True),
                div(spacer(10.25), block=True),
            )
        )

        rasters = await _rasterize(root)
        self.assertEqual(len(rasters), 2)
        self.assertEqual([(r.pixel_width, r.pixel_height) for r in rasters], [(200, 50), (200, 21)])
        self.assertEqual(rasters[0].image.getpixel((10, 10)), (255, 0, 0))
        self.assertEqual(rasters[1].image.getpixel((10, 10)), (255, 255, 255))
        self.assertEqual(len(rasters[0].pixel_data), 200 * 50 * 3)

    async def test_ancestor_background_is_painted_into_each_block(self) -> None:
        section = div(
            div(spacer(20), block=True),
            div(spacer(20), block=True),
            style=Style(background=colors.HexColor("#0000FF")),
        )
        rasters = await _rasterize(_laid_out(div(section)))

        for raster in rasters:
            self.assertEqual(raster.image.getpixel((100, 20)), (0, 0, 255))

    async def test_text_leaves_ink_on_the_canvas(self) -> None:
        root = _laid_out(div(div(text("Statement of Work", Style(font_size=14)), block=True)))
        (raster,) = await _rasterize(root)

        lowest = min(raster.image.convert("L").getdata())
        self.assertLess(lowest, 128)

    async def test_images_are_loaded_relative_to_asset_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            Image.new("RGB", (8, 8), (0, 200, 0)).save(Path(tmp_dir) / "logo.png")
            root = _laid_out(div(div(image("logo.png", width=20, height=20), block=True)))

            (raster,) = await _rasterize(root, loader=ResourceLoader(asset_root=tmp_dir))

        self.assertEqual(raster.pixel_height, 40)
        self.assertEqual(raster.image.getpixel((10, 10)), (0, 200, 0))

    async def test_missing_image_fails_with_block_index(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            root = _laid_out(
                div(
                    div(spacer(10), block=True),
                    div(image("missing.png", width=10, height=10), block=True),
                )
            )

            with self.assertRaises(RasterError) as context:
                await _rasterize(root, loader=ResourceLoader(asset_root=tmp_dir))

        self.assertEqual(context.exception.block_index, 1)
        self.assertEqual(context.exception.stage, "rasterize")

    async def test_slow_resource_fails_with_timeout_error(self) -> None:
        root = _laid_out(div(div(image("https://example.com/logo.png", width=10, height=10), block=True)))

        with self.assertRaises(RasterTimeoutError) as context:
            await _rasterize(root, loader=_TimingOutLoader())
        self.assertEqual(context.exception.block_index, 0)

    async def test_rejects_mismatched_or_invalid_inputs(self) -> None:
        root = _laid_out(div(div(spacer(10), block=True)))

        with self.assertRaises(ValueError):
            await _rasterize(root, fonts=FontBook.from_theme(Theme, density=1))
        with self.assertRaises(ValueError):
            await _rasterize(root, background=colors.Color(1, 1, 1, alpha=0.5))
        with self.assertRaises(ValueError):
            await _rasterize(root, width=0)

    async def test_source_tree_is_not_modified(self) -> None:
        root = _laid_out(div(div(text("Hello"), block=True)))
        before = root.children[0].children[0].lines

        await _rasterize(root)
        self.assertEqual(root.children[0].children[0].lines, before)
        self.assertEqual(len(root.children), 1)


class DetachedCloneTests(unittest.TestCase):
    def test_clone_is_independent_and_released_on_exit(self) -> None:
        root = _laid_out(div(div(spacer(10), block=True)))

        with detached_clone(root) as clone:
            self.assertIsNot(clone, root)
            self.assertIsNot(clone.children[0], root.children[0])
            self.assertEqual(clone.children[0].box, root.children[0].box)

        self.assertEqual(clone.children, [])
        self.assertIsNone(clone.box)
        self.assertEqual(len(root.children), 1)

    def test_clone_is_released_when_the_body_raises(self) -> None:
        root = _laid_out(div(div(spacer(10), block=True)))

        with self.assertRaises(RuntimeError):
            with detached_clone(root) as clone:
                raise RuntimeError("boom")
        self.assertEqual(clone.children, [])


if __name__ == "__main__":
    unittest.main()
