"""Block discovery over a laid-out view tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..view.nodes import BLOCK_MARKER, BREAK_BEFORE_MARKER, ViewNode
from .errors import NoContentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Block:
    """An atomic vertical region of the view that must stay on one page.

    Offsets are view pixels measured from the top of the root node. ``path``
    holds the child indexes leading from the root to the block's node.
    """

    vertical_start: float
    vertical_end: float
    force_break_before: bool
    path: tuple[int, ...]

    @property
    def height(self) -> float:
        return self.vertical_end - self.vertical_start


def _marked_candidates(root: ViewNode) -> list[tuple[ViewNode, tuple[int, ...], bool]]:
    found: list[tuple[ViewNode, tuple[int, ...], bool]] = []

    def visit(node: ViewNode, path: tuple[int, ...], pending_break: bool) -> bool:
        pending_break = pending_break or node.has_marker(BREAK_BEFORE_MARKER)
        if node is not root and node.has_marker(BLOCK_MARKER):
            found.append((node, path, pending_break))
            return False
        for idx, child in enumerate(node.children):
            pending_break = visit(child, (*path, idx), pending_break)
        return pending_break

    visit(root, (), False)
    return found


def _child_candidates(root: ViewNode) -> list[tuple[ViewNode, tuple[int, ...], bool]]:
    return [
        (child, (idx,), child.has_marker(BREAK_BEFORE_MARKER))
        for idx, child in enumerate(root.children)
    ]


def extract_blocks(root: ViewNode) -> list[Block]:
    """Return the ordered blocks of a laid-out view.

    Nodes tagged with the block marker are used when any exist; otherwise every
    direct child of ``root`` is one block. A break marker on a block, or on a
    container that has not produced a block yet, forces a new page before it.
    """
    if root.box is None:
        msg = "view tree must be laid out before blocks can be extracted."
        raise ValueError(msg)

    candidates = _marked_candidates(root)
    if not candidates:
        logger.debug("no block markers found, falling back to direct children")
        candidates = _child_candidates(root)

    origin = root.box.top
    blocks: list[Block] = []
    carried_break = False
    for node, path, force_break in candidates:
        if node.box is None:
            msg = f"node at path {list(path)} has not been laid out."
            raise ValueError(msg)
        force_break = force_break or carried_break
        if node.box.height <= 0:
            logger.debug("skipping empty block at path %s", list(path))
            carried_break = force_break
            continue
        carried_break = False
        blocks.append(
            Block(
                vertical_start=node.box.top - origin,
                vertical_end=node.box.bottom - origin,
                force_break_before=force_break,
                path=path,
            )
        )

    if not blocks:
        msg = "the proposal view has no content to paginate."
        raise NoContentError(msg)

    # sorted() is stable, so ties keep document order.
    return sorted(blocks, key=lambda block: block.vertical_start)
