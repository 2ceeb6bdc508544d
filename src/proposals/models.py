"""Proposal configuration and pricing records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Agent = Literal["seo", "paid_ads", "website"]
PricedAgent = Literal["seo", "paid_ads", "website", "seo_paid_combo"]
Template = Literal["leads", "ecom"]
ContractTerm = Literal["annual", "bi_annual", "quarterly", "monthly"]

AGENTS: tuple[Agent, ...] = ("seo", "paid_ads", "website")
TEMPLATES: tuple[Template, ...] = ("leads", "ecom")
CONTRACT_TERMS: tuple[ContractTerm, ...] = ("annual", "bi_annual", "quarterly", "monthly")


def validate_agent(agent: str) -> None:
    if agent not in AGENTS:
        msg = f"unknown agent '{agent}'. Valid agents: {', '.join(AGENTS)}."
        raise ValueError(msg)


def validate_template(template: str) -> None:
    if template not in TEMPLATES:
        msg = f"unknown template '{template}'. Valid templates: {', '.join(TEMPLATES)}."
        raise ValueError(msg)


def validate_term(term: str) -> None:
    if term not in CONTRACT_TERMS:
        msg = f"unknown contract term '{term}'. Valid terms: {', '.join(CONTRACT_TERMS)}."
        raise ValueError(msg)


def validate_discount(discount_percentage: float) -> None:
    if isinstance(discount_percentage, bool) or not isinstance(discount_percentage, (int, float)):
        msg = "discount percentage must be a number."
        raise TypeError(msg)
    if not 0 <= discount_percentage <= 100:
        msg = "discount percentage must be between 0 and 100."
        raise ValueError(msg)


@dataclass(frozen=True)
class TermOption:
    """One contract term offered to the customer with its own discount."""

    term: ContractTerm
    discount_percentage: float = 0.0


@dataclass(frozen=True)
class ProposalConfig:
    """Everything a sales rep enters to produce a proposal."""

    id: str
    customer_name: str
    company_name: str
    template: Template
    selected_agents: tuple[Agent, ...]
    contract_term: ContractTerm
    sales_rep_name: str
    sales_rep_email: str
    created_at: datetime
    discount_percentage: float = 0.0
    selected_terms: tuple[TermOption, ...] = ()

    def term_options(self) -> tuple[TermOption, ...]:
        """Return the offered terms, falling back to the single legacy term."""
        if self.selected_terms:
            return self.selected_terms
        return (TermOption(term=self.contract_term, discount_percentage=self.discount_percentage),)

    def validate(self) -> None:
        """Raise ``ValueError`` when any field is outside its allowed values."""
        if not self.company_name.strip():
            msg = "company name cannot be empty."
            raise ValueError(msg)
        if not self.selected_agents:
            msg = "at least one agent must be selected."
            raise ValueError(msg)
        validate_template(self.template)
        for agent in self.selected_agents:
            validate_agent(agent)
        if len(set(self.selected_agents)) != len(self.selected_agents):
            msg = "selected agents cannot contain duplicates."
            raise ValueError(msg)
        validate_term(self.contract_term)
        validate_discount(self.discount_percentage)
        for option in self.selected_terms:
            validate_term(option.term)
            validate_discount(option.discount_percentage)


@dataclass(frozen=True)
class AgentPrice:
    """Monthly price for one billed line item."""

    agent: PricedAgent
    name: str
    base_price: float
    final_price: float


@dataclass(frozen=True)
class PricingBreakdown:
    """Resolved monthly and upfront pricing for one contract term."""

    agents: tuple[AgentPrice, ...]
    subtotal: float
    discount_amount: float
    total: float
    upfront_total: float
    term_months: int
    term: ContractTerm


@dataclass(frozen=True)
class Proposal:
    """A decoded proposal plus the pricing of every offered term."""

    config: ProposalConfig
    pricing: tuple[tuple[TermOption, PricingBreakdown], ...]
