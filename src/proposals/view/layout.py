"""Box layout for view trees.

Columns stack children top to bottom. Rows give fixed-width children their
width, split what is left evenly between the others and stretch every cell to
the tallest one. Text wraps greedily on spaces.
"""

from __future__ import annotations

from dataclasses import replace

from .fonts import FontBook
from .nodes import Box, ViewNode


def wrap_text(
    value: str,
    *,
    max_width: float,
    fonts: FontBook,
    size: float,
    bold: bool = False,
) -> tuple[str, ...]:
    """Greedy word wrap; a single word wider than the line stays on its own line."""
    lines: list[str] = []
    for paragraph in value.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if fonts.text_width(candidate, size, bold=bold) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return tuple(lines)


def line_height(node: ViewNode) -> float:
    return node.style.font_size * node.style.line_height


def _layout_node(node: ViewNode, *, left: float, top: float, width: float, fonts: FontBook) -> float:
    style = node.style
    if style.width is not None:
        width = min(style.width, width)
    inner_left = left + style.padding_x
    inner_top = top + style.padding_y
    inner_width = max(0.0, width - (2 * style.padding_x))

    content_height = 0.0
    if node.text is not None:
        node.lines = wrap_text(
            node.text,
            max_width=inner_width,
            fonts=fonts,
            size=style.font_size,
            bold=style.bold,
        )
        content_height = len(node.lines) * line_height(node)
    elif node.children and style.direction == "row":
        count = len(node.children)
        available = inner_width - (style.gap * (count - 1))
        fixed = [child.style.width for child in node.children if child.style.width is not None]
        flexible = count - len(fixed)
        flex_width = max(0.0, available - sum(fixed)) / flexible if flexible else 0.0
        row_height = 0.0
        cell_left = inner_left
        for child in node.children:
            cell_width = child.style.width if child.style.width is not None else flex_width
            child_top = inner_top + child.style.margin_top
            child_height = _layout_node(child, left=cell_left, top=child_top, width=cell_width, fonts=fonts)
            row_height = max(row_height, child.style.margin_top + child_height + child.style.margin_bottom)
            cell_left += cell_width + style.gap
        for child in node.children:
            if child.box is not None and child.style.height is None:
                stretched = row_height - child.style.margin_top - child.style.margin_bottom
                child.box = replace(child.box, height=stretched)
        content_height = row_height
    elif node.children:
        cursor = inner_top
        for idx, child in enumerate(node.children):
            if idx:
                cursor += style.gap
            cursor += child.style.margin_top
            cursor += _layout_node(child, left=inner_left, top=cursor, width=inner_width, fonts=fonts)
            cursor += child.style.margin_bottom
        content_height = cursor - inner_top

    if style.height is not None:
        height = style.height
    else:
        height = content_height + (2 * style.padding_y)
    node.box = Box(left=left, top=top, width=width, height=height)
    return height


def layout_view(root: ViewNode, *, width: float, fonts: FontBook) -> float:
    """Compute absolute boxes for every node and return the root's height."""
    if width <= 0:
        msg = "layout width must be positive."
        raise ValueError(msg)
    return _layout_node(root, left=0.0, top=0.0, width=width, fonts=fonts)
