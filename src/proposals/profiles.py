"""Page profiles for proposal pagination."""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4

from .config import (
    BLOCK_GAP_PX,
    CONTENT_WIDTH_PX,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
    RASTER_DENSITY,
)


@dataclass(frozen=True)
class PageProfile:
    """Physical page geometry plus the raster parameters used to fill it.

    Page sizes and margins are PDF points. ``content_width_px`` and
    ``block_gap_px`` are view pixels, the unit the proposal view is laid out in.
    """

    name: str
    page_width: float
    page_height: float
    margin: float = PAGE_MARGIN
    content_width_px: int = CONTENT_WIDTH_PX
    density: int = RASTER_DENSITY
    block_gap_px: float = BLOCK_GAP_PX

    @property
    def content_width(self) -> float:
        return self.page_width - (2 * self.margin)

    @property
    def content_height(self) -> float:
        return self.page_height - (2 * self.margin)


DEFAULT_PAGE_PROFILE = "letter"

PAGE_PROFILES = {
    "letter": PageProfile(name="Letter", page_width=PAGE_WIDTH, page_height=PAGE_HEIGHT),
    "a4": PageProfile(
        name="A4",
        page_width=A4[0],
        page_height=A4[1],
        # 595.27pt - 2 * 36pt at 96dpi
        content_width_px=698,
    ),
}


def validate_page_profile(profile: PageProfile) -> None:
    """Reject geometry that cannot hold any content."""
    if profile.margin < 0:
        msg = "page margin must be >= 0."
        raise ValueError(msg)
    if profile.content_width <= 0 or profile.content_height <= 0:
        msg = "page margins leave no room for content."
        raise ValueError(msg)
    if profile.content_width_px <= 0:
        msg = "content_width_px must be positive."
        raise ValueError(msg)
    if isinstance(profile.density, bool) or not isinstance(profile.density, int):
        msg = "density must be an integer."
        raise TypeError(msg)
    if profile.density < 1:
        msg = "density must be >= 1."
        raise ValueError(msg)
    if profile.block_gap_px < 0:
        msg = "block_gap_px must be >= 0."
        raise ValueError(msg)


def resolve_page_profile(name: str = DEFAULT_PAGE_PROFILE) -> PageProfile:
    """Return the named page profile after validating it."""
    try:
        profile = PAGE_PROFILES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(PAGE_PROFILES))
        msg = f"unknown page profile '{name}'. Valid profiles: {valid}."
        raise ValueError(msg) from exc
    validate_page_profile(profile)
    return profile
