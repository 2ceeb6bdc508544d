"""View tree, layout and the proposal view builder."""

from .fonts import FontBook
from .layout import layout_view, wrap_text
from .nodes import BLOCK_MARKER, BREAK_BEFORE_MARKER, Box, Style, ViewNode, div, image, spacer, text
from .proposal_page import build_proposal_view

__all__ = [
    "BLOCK_MARKER",
    "BREAK_BEFORE_MARKER",
    "Box",
    "FontBook",
    "Style",
    "ViewNode",
    "build_proposal_view",
    "div",
    "image",
    "layout_view",
    "spacer",
    "text",
    "wrap_text",
]
