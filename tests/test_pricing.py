"""Tests for proposal pricing."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone

from proposals.models import ProposalConfig, TermOption
from proposals.pricing import (
    calculate_pricing,
    format_price,
    get_term_display_name,
    get_term_months,
    price_proposal,
)


class CalculatePricingTests(unittest.TestCase):
    def test_single_agent_without_discount(self) -> None:
        pricing = calculate_pricing(["website"], "quarterly")

        self.assertEqual([line.agent for line in pricing.agents], ["website"])
        self.assertEqual(pricing.subtotal, 1500)
        self.assertEqual(pricing.total, 1500)
        self.assertEqual(pricing.discount_amount, 0)
        self.assertEqual(pricing.term_months, 3)
        self.assertEqual(pricing.upfront_total, 4500)

    def test_seo_and_paid_ads_are_billed_as_bundle(self) -> None:
        pricing = calculate_pricing(["seo", "website", "paid_ads"], "monthly")

        self.assertEqual([line.agent for line in pricing.agents], ["seo_paid_combo", "website"])
        self.assertEqual(pricing.subtotal, 7500)

    def test_discount_applies_to_every_line(self) -> None:
        pricing = calculate_pricing(["seo", "website"], "annual", 10)

        self.assertEqual([line.final_price for line in pricing.agents], [3150, 1350])
        self.assertEqual(pricing.total, 4500)
        self.assertEqual(pricing.discount_amount, 500)
        self.assertEqual(pricing.upfront_total, 54000)

    def test_rejects_invalid_inputs(self) -> None:
        with self.assertRaises(ValueError):
            calculate_pricing([], "annual")
        with self.assertRaises(ValueError):
            calculate_pricing(["crm"], "annual")  # type: ignore[list-item]
        with self.assertRaises(ValueError):
            calculate_pricing(["seo"], "weekly")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            calculate_pricing(["seo"], "annual", 120)
        with self.assertRaises(TypeError):
            calculate_pricing(["seo"], "annual", True)


class TermHelperTests(unittest.TestCase):
    def test_term_months_and_names(self) -> None:
        self.assertEqual(
            [get_term_months(term) for term in ("annual", "bi_annual", "quarterly", "monthly")],
            [12, 6, 3, 1],
        )
        self.assertEqual(get_term_display_name("bi_annual"), "Bi-Annual")

    def test_format_price_rounds_to_whole_dollars(self) -> None:
        self.assertEqual(format_price(3500), "$3,500")
        self.assertEqual(format_price(1234.56), "$1,235")
        self.assertEqual(format_price(0), "$0")


class PriceProposalTests(unittest.TestCase):
    def _config(self, **overrides) -> ProposalConfig:
        values = {
            "id": "abc123def456",
            "customer_name": "Jane Doe",
            "company_name": "Acme Co",
            "template": "ecom",
            "selected_agents": ("seo",),
            "contract_term": "bi_annual",
            "sales_rep_name": "Sam Rep",
            "sales_rep_email": "sam@gomega.ai",
            "created_at": datetime(2026, 3, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return ProposalConfig(**values)

    def test_legacy_single_term(self) -> None:
        proposal = price_proposal(self._config(discount_percentage=5))

        ((option, pricing),) = proposal.pricing
        self.assertEqual(option, TermOption("bi_annual", 5))
        self.assertEqual(pricing.total, 3325)

    def test_prices_every_offered_term_in_order(self) -> None:
        terms = (TermOption("annual", 15), TermOption("quarterly", 5), TermOption("monthly"))
        proposal = price_proposal(self._config(selected_terms=terms))

        self.assertEqual([option.term for option, _ in proposal.pricing], ["annual", "quarterly", "monthly"])
        self.assertEqual([pricing.total for _, pricing in proposal.pricing], [2975, 3325, 3500])

    def test_rejects_invalid_configurations(self) -> None:
        with self.assertRaises(ValueError):
            price_proposal(self._config(company_name="  "))
        with self.assertRaises(ValueError):
            price_proposal(self._config(selected_agents=()))
        with self.assertRaises(ValueError):
            price_proposal(self._config(selected_agents=("seo", "seo")))
        with self.assertRaises(ValueError):
            price_proposal(self._config(template="retail"))


if __name__ == "__main__":
    unittest.main()
