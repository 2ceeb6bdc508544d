"""View tree primitives consumed by layout and pagination."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Literal

BLOCK_MARKER = "data-pdf-block"
BREAK_BEFORE_MARKER = "data-pdf-break-before"


@dataclass(frozen=True)
class Box:
    """Absolute bounds in view pixels, measured from the top-left corner."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Style:
    """The subset of box styling the layout engine and rasterizer understand."""

    background: Any = None
    color: Any = None
    font_size: float = 14.0
    bold: bool = False
    line_height: float = 1.5
    align: Literal["left", "center", "right"] = "left"
    padding_x: float = 0.0
    padding_y: float = 0.0
    margin_top: float = 0.0
    margin_bottom: float = 0.0
    border_color: Any = None
    border_width: float = 0.0
    radius: float = 0.0
    direction: Literal["column", "row"] = "column"
    gap: float = 0.0
    width: float | None = None
    height: float | None = None
    strike: bool = False


@dataclass(eq=False)
class ViewNode:
    """One element of a rendered view.

    ``box`` and ``lines`` stay empty until :func:`proposals.view.layout.layout_view`
    has run over the tree.
    """

    tag: str = "div"
    style: Style = field(default_factory=Style)
    text: str | None = None
    src: str | None = None
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[ViewNode] = field(default_factory=list)
    box: Box | None = None
    lines: tuple[str, ...] = ()

    def has_marker(self, name: str) -> bool:
        return name in self.attrs

    def walk(self) -> Iterator[ViewNode]:
        """Yield this node and its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def resolve(self, path: Sequence[int]) -> ViewNode:
        """Return the descendant reached by following child indexes."""
        node = self
        for index in path:
            node = node.children[index]
        return node

    def ancestors_of(self, path: Sequence[int]) -> list[ViewNode]:
        """Return the nodes from this root down to, but excluding, ``path``'s node."""
        chain: list[ViewNode] = []
        node = self
        for index in path:
            chain.append(node)
            node = node.children[index]
        return chain


def div(
    *children: ViewNode,
    style: Style | None = None,
    block: bool = False,
    break_before: bool = False,
    tag: str = "div",
) -> ViewNode:
    """Build a container node, optionally tagged with pagination markers."""
    attrs: dict[str, str] = {}
    if block:
        attrs[BLOCK_MARKER] = ""
    if break_before:
        attrs[BREAK_BEFORE_MARKER] = ""
    return ViewNode(tag=tag, style=style or Style(), attrs=attrs, children=list(children))


def text(value: str, style: Style | None = None, *, tag: str = "p") -> ViewNode:
    return ViewNode(tag=tag, style=style or Style(), text=value)


def image(src: str, *, width: float, height: float, style: Style | None = None) -> ViewNode:
    sized = replace(style or Style(), width=width, height=height)
    return ViewNode(tag="img", style=sized, src=src)


def spacer(height: float) -> ViewNode:
    return ViewNode(style=Style(height=height))
