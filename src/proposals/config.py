"""Configuration constants for proposal rendering and pagination."""

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER

# Letter size in PDF points.
PAGE_WIDTH, PAGE_HEIGHT = LETTER

# Half-inch margins on every side.
PAGE_MARGIN = 36

# Content width in view pixels (540pt at 96dpi).
CONTENT_WIDTH_PX = 720

# Raster density multiplier.
RASTER_DENSITY = 2

# Vertical gap between packed blocks, in view pixels.
BLOCK_GAP_PX = 12

# Seconds allowed for loading a single external resource.
RESOURCE_TIMEOUT_SECONDS = 10.0

# File output
DOWNLOAD_DIR_ENV = "PROPOSALS_DOWNLOAD_DIR"
DOWNLOAD_SUFFIX = "Proposal"
FOOTER_TEXT = "MEGA AI  •  gomega.ai"
FOOTER_FONT = "Helvetica"
FOOTER_FONT_SIZE = 7.5


class Theme:
    """Color and font choices for rendering."""

    BACKGROUND = colors.white
    BRAND = colors.HexColor("#2563EB")
    BRAND_LIGHT = colors.HexColor("#EFF6FF")
    BRAND_MUTED = colors.HexColor("#DBEAFE")

    TEXT_PRIMARY = colors.HexColor("#111827")
    TEXT_BODY = colors.HexColor("#374151")
    TEXT_SECONDARY = colors.HexColor("#6B7280")
    TEXT_FAINT = colors.HexColor("#9CA3AF")

    SURFACE = colors.HexColor("#F9FAFB")
    SURFACE_ALT = colors.HexColor("#F3F4F6")
    BORDER = colors.HexColor("#E5E7EB")

    SUCCESS = colors.HexColor("#16A34A")
    SUCCESS_LIGHT = colors.HexColor("#F0FDF4")
    SUCCESS_DARK = colors.HexColor("#166534")

    FONT_REGULAR = "DejaVuSans.ttf"
    FONT_BOLD = "DejaVuSans-Bold.ttf"
