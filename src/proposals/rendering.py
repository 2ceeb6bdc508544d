"""Render decoded proposals into laid-out views and downloadable PDFs."""

from __future__ import annotations

from pathlib import Path

from .config import Theme
from .encoding import decode_proposal
from .models import Proposal
from .pagination import DownloadSession, PaginationSettings
from .pricing import price_proposal
from .profiles import PageProfile
from .view import FontBook, ViewNode, build_proposal_view, layout_view


def load_proposal(encoded: str) -> Proposal:
    """Decode and price a proposal id, raising ``ValueError`` when it is invalid."""
    config = decode_proposal(encoded)
    if config is None:
        msg = "proposal id is not valid."
        raise ValueError(msg)
    return price_proposal(config)


def render_proposal_view(
    proposal: Proposal,
    *,
    profile: PageProfile,
    theme: type = Theme,
    logo: str | None = None,
    fonts: FontBook | None = None,
) -> ViewNode:
    """Build the proposal view and lay it out at the profile's content width."""
    root = build_proposal_view(proposal, theme=theme, logo=logo)
    layout_view(
        root,
        width=profile.content_width_px,
        fonts=fonts or FontBook.from_theme(theme, density=profile.density),
    )
    return root


async def download_proposal(
    proposal: Proposal,
    *,
    settings: PaginationSettings,
    directory: str | Path | None = None,
    logo: str | None = None,
    session: DownloadSession | None = None,
) -> Path | None:
    """Render ``proposal`` and save it through a download session."""
    session = session or DownloadSession(settings)
    root = render_proposal_view(proposal, profile=settings.profile, theme=settings.theme, logo=logo)
    return await session.download(root, proposal.config.company_name, directory=directory)
