"""Build the rendered proposal view.

Each top-level section is tagged as a pagination block. Section headings are
grouped with the first row that follows them so a heading never ends a page
on its own.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from ..config import Theme
from ..content import (
    COMBO_SHORT_DESCRIPTION,
    EXECUTIVE_SUMMARY_CONTENT,
    IMPLEMENTATION_TIMELINE,
    SERVICE_DESCRIPTIONS,
    WHY_MEGA,
    get_service_scope,
)
from ..models import PricingBreakdown, Proposal, TermOption
from ..pricing import format_price, get_term_display_name
from .nodes import Style, ViewNode, div, image, spacer, text

SECTION_PADDING_X = 40

T = TypeVar("T")


def _pair_up(items: Sequence[T]) -> list[list[T]]:
    return [list(items[idx : idx + 2]) for idx in range(0, len(items), 2)]


def _section_title(title: str, theme: type) -> list[ViewNode]:
    return [
        text(title, Style(font_size=20, bold=True, color=theme.TEXT_PRIMARY, margin_bottom=8), tag="h2"),
        div(style=Style(background=theme.BRAND, width=48, height=3, margin_bottom=16)),
    ]


def _bullet(value: str, theme: type, *, marker: str = "•", size: float = 11) -> ViewNode:
    return div(
        text(marker, Style(font_size=size, bold=True, color=theme.BRAND, width=16)),
        text(value, Style(font_size=size, color=theme.TEXT_BODY, line_height=1.4)),
        style=Style(direction="row", gap=0, margin_bottom=4),
    )


def _row(cells: Sequence[ViewNode], *, gap: float = 14, margin_bottom: float = 14) -> ViewNode:
    padded = list(cells)
    if len(padded) == 1:
        padded.append(div())
    return div(*padded, style=Style(direction="row", gap=gap, margin_bottom=margin_bottom))


def _section(*children: ViewNode, block: bool = True, break_before: bool = False) -> ViewNode:
    return div(
        *children,
        style=Style(padding_x=SECTION_PADDING_X),
        block=block,
        break_before=break_before,
    )


def _header(proposal: Proposal, theme: type, logo: str | None) -> ViewNode:
    config = proposal.config
    brand_row: list[ViewNode] = []
    if logo:
        brand_row.append(image(logo, width=40, height=40, style=Style(margin_bottom=10)))
    brand_row.append(text("MEGA", Style(font_size=22, bold=True, color=theme.BACKGROUND, margin_bottom=14)))
    agent_titles = "  |  ".join(SERVICE_DESCRIPTIONS[agent].title for agent in config.selected_agents)
    banner = div(
        *brand_row,
        text("Statement of Work", Style(font_size=32, bold=True, color=theme.BACKGROUND, margin_bottom=6), tag="h1"),
        text(agent_titles, Style(font_size=15, color=theme.BRAND_MUTED)),
        style=Style(background=theme.BRAND, padding_x=SECTION_PADDING_X, padding_y=36),
    )

    def meta(label: str, value: str, sub: str | None = None, *, align: str = "left") -> ViewNode:
        children = [
            text(label.upper(), Style(font_size=9, bold=True, color=theme.TEXT_FAINT, align=align, margin_bottom=2)),
            text(value, Style(font_size=13, bold=True, color=theme.TEXT_PRIMARY, align=align)),
        ]
        if sub:
            children.append(text(sub, Style(font_size=11, color=theme.TEXT_SECONDARY, align=align)))
        return div(*children, style=Style(margin_bottom=10))

    meta_row = div(
        div(meta("Prepared For", config.customer_name, config.company_name)),
        div(
            meta("Date", config.created_at.strftime("%B %d, %Y"), align="right"),
            meta("Prepared By", config.sales_rep_name, config.sales_rep_email, align="right"),
        ),
        style=Style(direction="row", padding_x=SECTION_PADDING_X, padding_y=20),
    )
    return div(banner, meta_row, block=True)


def _executive_summary(proposal: Proposal, theme: type) -> ViewNode:
    return _section(
        *_section_title("Executive Summary", theme),
        text(
            EXECUTIVE_SUMMARY_CONTENT[proposal.config.template],
            Style(font_size=12, color=theme.TEXT_BODY, line_height=1.6),
        ),
    )


def _services(proposal: Proposal, theme: type) -> list[ViewNode]:
    pricing = proposal.pricing[0][1]
    cards: list[ViewNode] = []
    for line in pricing.agents:
        if line.agent == "seo_paid_combo":
            badge, description = "BUNDLE", COMBO_SHORT_DESCRIPTION
        else:
            service = SERVICE_DESCRIPTIONS[line.agent]
            badge, description = service.badge, service.short_description
        cards.append(
            div(
                text(badge, Style(font_size=8, bold=True, color=theme.BRAND, margin_bottom=6)),
                text(line.name, Style(font_size=13, bold=True, color=theme.TEXT_PRIMARY, margin_bottom=4)),
                text(description, Style(font_size=10, color=theme.TEXT_SECONDARY, line_height=1.4)),
                style=Style(
                    background=theme.SURFACE,
                    border_color=theme.BORDER,
                    border_width=1,
                    radius=6,
                    padding_x=16,
                    padding_y=14,
                ),
            )
        )
    sections: list[ViewNode] = []
    for idx, pair in enumerate(_pair_up(cards)):
        heading = _section_title("Your Services", theme) if idx == 0 else []
        sections.append(_section(*heading, _row(pair)))
    return sections


def _why_mega(theme: type) -> ViewNode:
    columns = [
        div(
            text(title, Style(font_size=12, bold=True, color=theme.BRAND, margin_bottom=4)),
            text(description, Style(font_size=10, color=theme.TEXT_BODY, line_height=1.5)),
        )
        for title, description in WHY_MEGA
    ]
    return _section(*_section_title("Why MEGA", theme), div(*columns, style=Style(direction="row", gap=14)))


def _service_scope(proposal: Proposal, agent: str, theme: type, *, first: bool) -> list[ViewNode]:
    scope = get_service_scope(agent, proposal.config.template)  # type: ignore[arg-type]
    intro = _section(
        *_section_title(f"{scope.title} - Service Scope", theme),
        text(scope.description, Style(font_size=12, color=theme.TEXT_BODY, line_height=1.6, margin_bottom=12)),
        break_before=first,
    )
    halves = _pair_up(scope.deliverables)
    left = [item for pair in halves for item in pair[:1]]
    right = [item for pair in halves for item in pair[1:]]
    deliverables = _section(
        div(
            text("Key Deliverables", Style(font_size=13, bold=True, color=theme.TEXT_PRIMARY, margin_bottom=10)),
            div(
                div(*(_bullet(item, theme, marker="✓") for item in left)),
                div(*(_bullet(item, theme, marker="✓") for item in right)),
                style=Style(direction="row", gap=16),
            ),
            style=Style(background=theme.BRAND_LIGHT, radius=6, padding_x=18, padding_y=16),
        ),
    )
    return [intro, deliverables]


def _timeline(theme: type) -> list[ViewNode]:
    cards = [
        div(
            text(phase, Style(font_size=12, bold=True, color=theme.BRAND, margin_bottom=8)),
            *(_bullet(item, theme, size=10) for item in items),
            style=Style(border_color=theme.BORDER, border_width=1, radius=5, padding_x=14, padding_y=12),
        )
        for phase, items in IMPLEMENTATION_TIMELINE
    ]
    sections: list[ViewNode] = []
    for idx, pair in enumerate(_pair_up(cards)):
        heading: list[ViewNode] = []
        if idx == 0:
            heading = [
                *_section_title("Implementation Timeline", theme),
                text(
                    "Our proven 90-day implementation roadmap ensures rapid deployment and measurable results.",
                    Style(font_size=12, color=theme.TEXT_BODY, margin_bottom=12),
                ),
            ]
        sections.append(_section(*heading, _row(pair)))
    return sections


def _price_card(
    option: TermOption,
    pricing: PricingBreakdown,
    theme: type,
    *,
    best: bool,
    any_discount: bool,
) -> ViewNode:
    children: list[ViewNode] = []
    if best:
        children.append(text("BEST VALUE", Style(font_size=8, bold=True, color=theme.BRAND, align="center", margin_bottom=6)))
    children.append(text(get_term_display_name(option.term), Style(font_size=15, bold=True, color=theme.TEXT_PRIMARY, align="center")))
    children.append(text(f"{pricing.term_months} months", Style(font_size=10, color=theme.TEXT_SECONDARY, align="center", margin_bottom=12)))
    for line in pricing.agents:
        children.append(
            div(
                text(line.name, Style(font_size=10, color=theme.TEXT_BODY)),
                text(f"{format_price(line.final_price)}/mo", Style(font_size=11, bold=True, color=theme.TEXT_PRIMARY, align="right")),
                style=Style(direction="row", gap=8),
            )
        )
        if option.discount_percentage > 0:
            children.append(
                text(
                    f"was {format_price(line.base_price)}/mo",
                    Style(font_size=8, color=theme.TEXT_FAINT, align="right", strike=True, margin_bottom=4),
                )
            )
        elif any_discount:
            children.append(spacer(16))
    children.append(div(style=Style(background=theme.BORDER, height=1, margin_top=8, margin_bottom=8)))
    children.append(
        div(
            text("Monthly Rate", Style(font_size=11, bold=True, color=theme.TEXT_BODY)),
            text(f"{format_price(pricing.total)}/mo", Style(font_size=13, bold=True, color=theme.TEXT_PRIMARY, align="right")),
            style=Style(direction="row"),
        )
    )
    upfront = [
        text("Total Due Upfront", Style(font_size=9, color=theme.TEXT_SECONDARY, align="center", margin_bottom=2)),
        text(format_price(pricing.upfront_total), Style(font_size=22, bold=True, color=theme.BRAND, align="center")),
    ]
    if option.discount_percentage > 0:
        upfront.append(text(f"{option.discount_percentage:g}% discount applied", Style(font_size=9, color=theme.SUCCESS, align="center")))
    elif any_discount:
        upfront.append(text("Standard pricing", Style(font_size=9, color=theme.TEXT_SECONDARY, align="center")))
    children.append(div(*upfront, style=Style(background=theme.SURFACE_ALT, radius=5, padding_x=10, padding_y=10, margin_top=10)))
    return div(
        *children,
        style=Style(
            background=theme.BRAND_LIGHT if best else theme.BACKGROUND,
            border_color=theme.BRAND if best else theme.BORDER,
            border_width=2 if best else 1,
            radius=8,
            padding_x=14,
            padding_y=16,
        ),
    )


def _investment_summary(proposal: Proposal, theme: type) -> list[ViewNode]:
    single = len(proposal.pricing) == 1
    any_discount = any(option.discount_percentage > 0 for option, _ in proposal.pricing)
    cards = [
        _price_card(option, pricing, theme, best=not single and idx == 0, any_discount=any_discount)
        for idx, (option, pricing) in enumerate(proposal.pricing)
    ]
    sections = [
        _section(
            *_section_title("Investment Summary", theme),
            div(*cards, style=Style(direction="row", gap=12, margin_bottom=14)),
            break_before=True,
        )
    ]

    if not single:
        longest_option, longest = proposal.pricing[0]
        shortest_option, shortest = proposal.pricing[-1]
        saving = round(shortest.total - longest.total)
        if saving > 0:
            sections.append(
                _section(
                    div(
                        text(
                            f"Save {format_price(saving)}/mo by choosing "
                            f"{get_term_display_name(longest_option.term)} over "
                            f"{get_term_display_name(shortest_option.term)}",
                            Style(font_size=11, bold=True, color=theme.SUCCESS_DARK, align="center"),
                        ),
                        style=Style(
                            background=theme.SUCCESS_LIGHT,
                            border_color=theme.SUCCESS,
                            border_width=1,
                            radius=5,
                            padding_y=10,
                        ),
                    )
                )
            )
    return sections


def _next_steps(proposal: Proposal, theme: type) -> ViewNode:
    config = proposal.config
    steps = (
        "Review this proposal and let us know if you have any questions",
        "Select your preferred commitment term and confirm your agreement",
        "Our team begins onboarding, and campaigns go live within 30 days",
    )
    return _section(
        div(
            text("Next Steps", Style(font_size=14, bold=True, color=theme.TEXT_PRIMARY, margin_bottom=6)),
            text(
                f"We're excited to partner with {config.company_name} and drive meaningful results. "
                "Here's how to get started:",
                Style(font_size=11, color=theme.TEXT_BODY, line_height=1.6, margin_bottom=6),
            ),
            *(_bullet(step, theme, marker=f"{idx}.") for idx, step in enumerate(steps, start=1)),
            text(
                f"Contact {config.sales_rep_name} at {config.sales_rep_email} to get started.",
                Style(font_size=11, bold=True, color=theme.BRAND, margin_top=6),
            ),
            style=Style(
                background=theme.SURFACE,
                border_color=theme.BORDER,
                border_width=1,
                radius=6,
                padding_x=20,
                padding_y=18,
            ),
        )
    )


def build_proposal_view(proposal: Proposal, *, theme: type = Theme, logo: str | None = None) -> ViewNode:
    """Return the proposal view tree, ready for :func:`layout_view`."""
    sections: list[ViewNode] = [
        _header(proposal, theme, logo),
        _executive_summary(proposal, theme),
        *_services(proposal, theme),
        _why_mega(theme),
    ]
    for idx, agent in enumerate(proposal.config.selected_agents):
        sections.extend(_service_scope(proposal, agent, theme, first=idx == 0))
    sections.extend(_timeline(theme))
    sections.extend(_investment_summary(proposal, theme))
    sections.append(_next_steps(proposal, theme))
    return div(*sections, style=Style(background=theme.BACKGROUND, gap=28, padding_y=0), tag="main")
