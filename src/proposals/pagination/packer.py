"""Greedy first-fit packing of blocks onto fixed-height pages."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar


class Packable(Protocol):
    @property
    def height(self) -> float: ...

    @property
    def force_break_before(self) -> bool: ...


ItemT = TypeVar("ItemT", bound=Packable)


@dataclass(frozen=True)
class PackItem:
    """A block reduced to what packing needs, plus its position in the input."""

    index: int
    height: float
    force_break_before: bool = False


@dataclass(frozen=True)
class Placement(Generic[ItemT]):
    """One item on a page and the height consumed above it, gaps included."""

    item: ItemT
    offset: float


@dataclass(frozen=True)
class PackedPage(Generic[ItemT]):
    placements: tuple[Placement[ItemT], ...]
    is_forced: bool = False

    @property
    def items(self) -> tuple[ItemT, ...]:
        return tuple(placement.item for placement in self.placements)

    @property
    def used_height(self) -> float:
        if not self.placements:
            return 0.0
        last = self.placements[-1]
        return last.offset + last.item.height


def pack_blocks(
    items: Sequence[ItemT],
    *,
    page_content_height: float,
    gap: float = 0.0,
) -> list[PackedPage[ItemT]]:
    """Assign items to pages in order without ever splitting one.

    A new page starts when the current page already holds something and the
    item either forces a break or would not fit after the gap. An item taller
    than a page therefore always lands alone on its own, overflowing page.
    """
    if page_content_height <= 0:
        msg = "page_content_height must be positive."
        raise ValueError(msg)
    if gap < 0:
        msg = "gap must be >= 0."
        raise ValueError(msg)

    pages: list[PackedPage[ItemT]] = []
    current: list[Placement[ItemT]] = []
    current_forced = False
    consumed = 0.0

    for item in items:
        if item.height <= 0:
            msg = "every packed item must have a positive height."
            raise ValueError(msg)
        if current and (item.force_break_before or consumed + gap + item.height > page_content_height):
            pages.append(PackedPage(placements=tuple(current), is_forced=current_forced))
            current = []
            current_forced = item.force_break_before
            consumed = 0.0

        offset = consumed + gap if current else 0.0
        current.append(Placement(item=item, offset=offset))
        consumed = offset + item.height

    if current:
        pages.append(PackedPage(placements=tuple(current), is_forced=current_forced))
    return pages
