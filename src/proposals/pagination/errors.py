"""Failures surfaced by a pagination pass."""

from __future__ import annotations


class PaginationError(Exception):
    """Base class for every error that aborts a pagination pass."""

    stage = "paginate"


class NoContentError(PaginationError):
    """The view produced no blocks to paginate."""

    stage = "extract"


class RasterError(PaginationError):
    """A single block could not be rasterized."""

    stage = "rasterize"

    def __init__(self, message: str, *, block_index: int) -> None:
        super().__init__(message)
        self.block_index = block_index


class RasterTimeoutError(RasterError):
    """Loading a block's external resources took longer than allowed."""


class EmitError(PaginationError):
    """The PDF document could not be assembled."""

    stage = "emit"

    def __init__(self, message: str, *, page_number: int | None = None) -> None:
        super().__init__(message)
        self.page_number = page_number
