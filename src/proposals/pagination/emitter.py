"""Assemble packed block rasters into a PDF and save it as a download."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from ..config import (
    DOWNLOAD_DIR_ENV,
    DOWNLOAD_SUFFIX,
    FOOTER_FONT,
    FOOTER_FONT_SIZE,
    Theme,
)
from ..drawing import PdfSurface, create_reportlab_surface
from ..profiles import PageProfile
from .errors import EmitError
from .packer import PackedPage, PackItem
from .rasterizer import RasterImage

logger = logging.getLogger(__name__)

_EMIT_FAILURES = (MemoryError, OSError, ValueError, TypeError, IndexError)


def _draw_footer(surface: PdfSurface, *, profile: PageProfile, text: str, number: int, total: int, theme: type) -> None:
    baseline = profile.margin / 2
    surface.set_fill_color(theme.TEXT_FAINT)
    surface.set_font(FOOTER_FONT, FOOTER_FONT_SIZE)
    surface.draw_string(profile.margin, baseline, text)
    surface.draw_right_string(profile.page_width - profile.margin, baseline, f"{number} / {total}")


def emit_pdf(
    pages: Sequence[PackedPage[PackItem]],
    rasters: Sequence[RasterImage],
    *,
    profile: PageProfile,
    title: str = "",
    footer: str | None = None,
    theme: type = Theme,
    surface_factory: Callable[..., PdfSurface] = create_reportlab_surface,
) -> bytes:
    """Draw every packed page and return the finished PDF bytes.

    One scale factor, page content width over raster width, converts every
    raster height and page offset so rounding never accumulates down a page.
    """
    if not pages:
        msg = "cannot emit a document without pages."
        raise EmitError(msg)
    widths = {raster.pixel_width for raster in rasters}
    if len(widths) != 1:
        msg = "all block rasters must share one pixel width."
        raise EmitError(msg)
    scale = profile.content_width / widths.pop()

    try:
        surface = surface_factory(pagesize=(profile.page_width, profile.page_height))
        if title:
            surface.set_title(title)
    except _EMIT_FAILURES as exc:
        msg = f"could not start the PDF document: {exc}"
        raise EmitError(msg) from exc

    total = len(pages)
    for number, page in enumerate(pages, start=1):
        try:
            for placement in page.placements:
                raster = rasters[placement.item.index]
                height = raster.pixel_height * scale
                top = profile.page_height - profile.margin - (placement.offset * scale)
                surface.draw_image(raster.image, profile.margin, top - height, profile.content_width, height)
            if footer:
                _draw_footer(surface, profile=profile, text=footer, number=number, total=total, theme=theme)
            surface.show_page()
        except _EMIT_FAILURES as exc:
            msg = f"could not assemble page {number}: {exc}"
            raise EmitError(msg, page_number=number) from exc

    try:
        data = surface.finish()
    except _EMIT_FAILURES as exc:
        msg = f"could not finish the PDF document: {exc}"
        raise EmitError(msg) from exc
    logger.debug("emitted %d page(s), %d bytes", total, len(data))
    return data


def document_filename(subject: str, *, suffix: str = DOWNLOAD_SUFFIX) -> str:
    """Return ``<Subject>_<suffix>.pdf`` with whitespace runs collapsed to ``_``."""
    cleaned = re.sub(r"\s+", "_", subject.strip())
    cleaned = re.sub(r"[\\/]", "-", cleaned)
    if not cleaned:
        return f"{suffix}.pdf"
    return f"{cleaned}_{suffix}.pdf"


def resolve_download_dir(directory: str | Path | None = None) -> Path:
    """Pick the explicit directory, then the env override, then ``~/Downloads``."""
    if directory is not None:
        return Path(directory)
    override = os.environ.get(DOWNLOAD_DIR_ENV)
    if override:
        return Path(override)
    return Path.home() / "Downloads"


def save_download(data: bytes, filename: str, *, directory: str | Path | None = None) -> Path:
    """Write ``data`` atomically so a partial file is never visible."""
    target_dir = resolve_download_dir(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    destination = target_dir / filename
    handle, temp_name = tempfile.mkstemp(dir=target_dir, prefix=".download-", suffix=".part")
    try:
        with os.fdopen(handle, "wb") as stream:
            stream.write(data)
        os.replace(temp_name, destination)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    return destination
