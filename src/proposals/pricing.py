"""Monthly and upfront pricing arithmetic."""

from __future__ import annotations

from collections.abc import Sequence

from .models import (
    Agent,
    AgentPrice,
    ContractTerm,
    PricingBreakdown,
    Proposal,
    ProposalConfig,
    validate_agent,
    validate_discount,
    validate_term,
)

BASE_PRICES: dict[str, float] = {
    "seo": 3500.0,
    "paid_ads": 3000.0,
    "website": 1500.0,
    "seo_paid_combo": 6000.0,
}

AGENT_NAMES: dict[str, str] = {
    "seo": "SEO & GEO Agent",
    "paid_ads": "Paid Ads Agent",
    "website": "Website Agent",
    "seo_paid_combo": "SEO & GEO + Paid Ads Agent Bundle",
}

TERM_MONTHS: dict[str, int] = {
    "annual": 12,
    "bi_annual": 6,
    "quarterly": 3,
    "monthly": 1,
}

TERM_DISPLAY_NAMES: dict[str, str] = {
    "annual": "Annual",
    "bi_annual": "Bi-Annual",
    "quarterly": "Quarterly",
    "monthly": "Monthly",
}


def get_term_months(term: ContractTerm) -> int:
    """Return the number of billed months in a contract term."""
    validate_term(term)
    return TERM_MONTHS[term]


def get_term_display_name(term: ContractTerm) -> str:
    validate_term(term)
    return TERM_DISPLAY_NAMES[term]


def format_price(amount: float) -> str:
    """Format whole dollars with thousands separators, e.g. ``$3,500``."""
    return f"${round(amount):,}"


def _billed_lines(agents: Sequence[Agent]) -> list[str]:
    lines: list[str] = []
    bundle = "seo" in agents and "paid_ads" in agents
    for agent in agents:
        if bundle and agent in ("seo", "paid_ads"):
            if "seo_paid_combo" not in lines:
                lines.append("seo_paid_combo")
            continue
        lines.append(agent)
    return lines


def calculate_pricing(
    agents: Sequence[Agent],
    term: ContractTerm,
    discount_percentage: float = 0.0,
) -> PricingBreakdown:
    """Price the selected agents for one term with a flat percentage discount."""
    if not agents:
        msg = "at least one agent must be selected."
        raise ValueError(msg)
    for agent in agents:
        validate_agent(agent)
    validate_term(term)
    validate_discount(discount_percentage)

    multiplier = 1 - (discount_percentage / 100)
    lines = tuple(
        AgentPrice(
            agent=line,  # type: ignore[arg-type]
            name=AGENT_NAMES[line],
            base_price=BASE_PRICES[line],
            final_price=round(BASE_PRICES[line] * multiplier, 2),
        )
        for line in _billed_lines(agents)
    )
    subtotal = sum(line.base_price for line in lines)
    total = round(sum(line.final_price for line in lines), 2)
    months = TERM_MONTHS[term]
    return PricingBreakdown(
        agents=lines,
        subtotal=subtotal,
        discount_amount=round(subtotal - total, 2),
        total=total,
        upfront_total=round(total * months, 2),
        term_months=months,
        term=term,
    )


def price_proposal(config: ProposalConfig) -> Proposal:
    """Validate a configuration and price every offered term once."""
    config.validate()
    pricing = tuple(
        (
            option,
            calculate_pricing(config.selected_agents, option.term, option.discount_percentage),
        )
        for option in config.term_options()
    )
    return Proposal(config=config, pricing=pricing)
