"""Block-aware pagination of rendered views into PDF documents."""

from .emitter import document_filename, emit_pdf, resolve_download_dir, save_download
from .errors import EmitError, NoContentError, PaginationError, RasterError, RasterTimeoutError
from .extractor import Block, extract_blocks
from .packer import PackedPage, PackItem, Placement, pack_blocks
from .pipeline import DownloadSession, PaginationSettings, SessionState, paginate
from .rasterizer import RasterImage, ResourceLoader, detached_clone, rasterize_blocks

__all__ = [
    "Block",
    "DownloadSession",
    "EmitError",
    "NoContentError",
    "PackItem",
    "PackedPage",
    "PaginationError",
    "PaginationSettings",
    "Placement",
    "RasterError",
    "RasterImage",
    "RasterTimeoutError",
    "ResourceLoader",
    "SessionState",
    "detached_clone",
    "document_filename",
    "emit_pdf",
    "extract_blocks",
    "pack_blocks",
    "paginate",
    "rasterize_blocks",
    "resolve_download_dir",
    "save_download",
]
