"""One pagination pass and the session that serializes download requests."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from ..config import FOOTER_TEXT, RESOURCE_TIMEOUT_SECONDS, Theme
from ..profiles import PageProfile, resolve_page_profile, validate_page_profile
from ..view.fonts import FontBook
from ..view.nodes import ViewNode
from .emitter import document_filename, emit_pdf, save_download
from .errors import PaginationError, RasterError
from .extractor import extract_blocks
from .packer import PackItem, pack_blocks
from .rasterizer import ResourceLoader, rasterize_blocks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationSettings:
    """Fixed inputs of a pagination pass."""

    profile: PageProfile
    theme: type = Theme
    footer: str | None = FOOTER_TEXT
    asset_root: Path | None = None
    resource_timeout: float = RESOURCE_TIMEOUT_SECONDS

    @classmethod
    def default(cls) -> PaginationSettings:
        return cls(profile=resolve_page_profile())


async def paginate(
    root: ViewNode,
    *,
    settings: PaginationSettings,
    fonts: FontBook | None = None,
    title: str = "",
) -> bytes:
    """Extract, rasterize, pack and emit ``root``; return the PDF bytes."""
    profile = settings.profile
    validate_page_profile(profile)
    fonts = fonts or FontBook.from_theme(settings.theme, density=profile.density)

    blocks = extract_blocks(root)
    logger.info("extracted %d block(s)", len(blocks))

    loader = ResourceLoader(asset_root=settings.asset_root, timeout=settings.resource_timeout)
    rasters = await rasterize_blocks(
        root,
        blocks,
        width=profile.content_width_px,
        density=profile.density,
        background=settings.theme.BACKGROUND,
        fonts=fonts,
        loader=loader,
    )

    # Pack in raster pixels, the unit the emitter scales from.
    scale = profile.content_width / rasters[0].pixel_width
    items = [
        PackItem(index=idx, height=raster.pixel_height, force_break_before=block.force_break_before)
        for idx, (block, raster) in enumerate(zip(blocks, rasters, strict=True))
    ]
    pages = pack_blocks(
        items,
        page_content_height=profile.content_height / scale,
        gap=profile.block_gap_px * profile.density,
    )
    logger.info("packed %d block(s) onto %d page(s)", len(items), len(pages))

    return emit_pdf(
        pages,
        rasters,
        profile=profile,
        title=title,
        footer=settings.footer,
        theme=settings.theme,
    )


class SessionState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class DownloadSession:
    """Owns the download trigger for one rendered view.

    Only one pass runs at a time: a request made while another is running is
    ignored and returns ``None``. Errors propagate to the caller after the
    state has moved to ``FAILED``; nothing is saved in that case.
    """

    def __init__(self, settings: PaginationSettings | None = None) -> None:
        self.settings = settings or PaginationSettings.default()
        self._state = SessionState.IDLE
        self.last_error: str | None = None
        self.last_path: Path | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    async def download(
        self,
        root: ViewNode,
        subject: str,
        *,
        directory: str | Path | None = None,
    ) -> Path | None:
        """Paginate ``root`` and save it as ``<subject>_Proposal.pdf``."""
        if self._state is SessionState.RUNNING:
            logger.info("download already in progress, ignoring request for %r", subject)
            return None

        self._state = SessionState.RUNNING
        self.last_error = None
        try:
            data = await paginate(root, settings=self.settings, title=subject)
            path = save_download(data, document_filename(subject), directory=directory)
        except asyncio.CancelledError:
            logger.info("download for %r abandoned by caller", subject)
            self._state = SessionState.IDLE
            raise
        except PaginationError as exc:
            self._state = SessionState.FAILED
            self.last_error = str(exc)
            if isinstance(exc, RasterError):
                logger.error("pagination failed at stage %s, block %d: %s", exc.stage, exc.block_index, exc)
            else:
                logger.error("pagination failed at stage %s: %s", exc.stage, exc)
            raise
        except (OSError, ValueError) as exc:
            self._state = SessionState.FAILED
            self.last_error = str(exc)
            logger.error("download failed: %s", exc)
            raise
        else:
            self._state = SessionState.SUCCEEDED
            self.last_path = path
        finally:
            # Unexpected errors still release the session.
            if self._state is SessionState.RUNNING:
                self._state = SessionState.FAILED

        logger.info("saved %s", path)
        return path
