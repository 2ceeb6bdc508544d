"""CLI for creating, inspecting and downloading proposals."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import FOOTER_TEXT, RESOURCE_TIMEOUT_SECONDS
from .encoding import encode_proposal
from .models import AGENTS, CONTRACT_TERMS, TEMPLATES, TermOption
from .pagination import PaginationError, PaginationSettings
from .pricing import format_price, get_term_display_name
from .profiles import DEFAULT_PAGE_PROFILE, PAGE_PROFILES, resolve_page_profile
from .rendering import download_proposal, load_proposal
from .theme_profiles import available_theme_profiles, resolve_theme


def parse_term_option(raw: str) -> TermOption:
    """Parse ``term`` or ``term:discount`` into a term option."""
    term, _, discount = raw.partition(":")
    if term not in CONTRACT_TERMS:
        msg = f"unknown contract term '{term}'. Valid terms: {', '.join(CONTRACT_TERMS)}."
        raise ValueError(msg)
    try:
        value = float(discount) if discount else 0.0
    except ValueError as exc:
        msg = f"invalid discount '{discount}' for term '{term}'."
        raise ValueError(msg) from exc
    if not 0 <= value <= 100:
        msg = "discount percentage must be between 0 and 100."
        raise ValueError(msg)
    return TermOption(term=term, discount_percentage=value)  # type: ignore[arg-type]


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create and download sales proposals.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="Encode a new proposal id.")
    create_parser.add_argument("--customer", required=True, help="Customer contact name.")
    create_parser.add_argument("--company", required=True, help="Customer company name.")
    create_parser.add_argument("--template", choices=TEMPLATES, default="leads", help="Proposal template.")
    create_parser.add_argument(
        "--agent",
        action="append",
        choices=AGENTS,
        required=True,
        help="Selected service agent (repeatable).",
    )
    create_parser.add_argument("--term", choices=CONTRACT_TERMS, default="annual", help="Contract term.")
    create_parser.add_argument("--discount", type=float, default=0.0, help="Discount percentage.")
    create_parser.add_argument(
        "--term-option",
        action="append",
        default=[],
        help="Offered term with optional discount, e.g. annual:10 (repeatable).",
    )
    create_parser.add_argument("--rep-name", required=True, help="Sales rep name.")
    create_parser.add_argument("--rep-email", required=True, help="Sales rep email.")

    show_parser = subparsers.add_parser("show", help="Show pricing for a proposal id.")
    show_parser.add_argument("proposal", help="Encoded proposal id.")

    download_parser = subparsers.add_parser("download", help="Render a proposal id to PDF.")
    download_parser.add_argument("proposal", help="Encoded proposal id.")
    download_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Download directory. Default: $PROPOSALS_DOWNLOAD_DIR or ~/Downloads",
    )
    download_parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_PROFILES),
        default=DEFAULT_PAGE_PROFILE,
        help="Output page size.",
    )
    download_parser.add_argument(
        "--theme-profile",
        choices=available_theme_profiles(),
        default="default",
        help="Built-in theme profile name.",
    )
    download_parser.add_argument("--theme-file", type=Path, default=None, help="JSON file with theme overrides.")
    download_parser.add_argument("--logo", default=None, help="Logo image path or URL.")
    download_parser.add_argument("--asset-root", type=Path, default=None, help="Base directory for relative images.")
    download_parser.add_argument(
        "--timeout",
        type=float,
        default=RESOURCE_TIMEOUT_SECONDS,
        help="Seconds allowed per external resource.",
    )
    download_parser.add_argument("--no-footer", action="store_true", help="Omit the page footer.")
    download_parser.add_argument("-v", "--verbose", action="store_true", help="Log pagination progress.")
    return parser


def _run_create(args: argparse.Namespace) -> int:
    selected_terms = tuple(parse_term_option(raw) for raw in args.term_option)
    encoded = encode_proposal(
        customer_name=args.customer,
        company_name=args.company,
        template=args.template,
        selected_agents=tuple(dict.fromkeys(args.agent)),
        contract_term=selected_terms[0].term if selected_terms else args.term,
        discount_percentage=args.discount,
        selected_terms=selected_terms,
        sales_rep_name=args.rep_name,
        sales_rep_email=args.rep_email,
    )
    # Pricing validates agents, terms and discounts before the id is handed out.
    load_proposal(encoded)
    print(encoded)
    return 0


def _run_show(args: argparse.Namespace) -> int:
    proposal = load_proposal(args.proposal)
    config = proposal.config
    print(f"id: {config.id}")
    print(f"customer: {config.customer_name} ({config.company_name})")
    print(f"template: {config.template}")
    print(f"prepared by: {config.sales_rep_name} <{config.sales_rep_email}>")
    for option, pricing in proposal.pricing:
        print(f"{get_term_display_name(option.term)} ({pricing.term_months} months):")
        for line in pricing.agents:
            print(f"  {line.name}: {format_price(line.final_price)}/mo (base {format_price(line.base_price)})")
        print(f"  monthly rate: {format_price(pricing.total)}/mo")
        if pricing.discount_amount > 0:
            print(f"  monthly savings: {format_price(pricing.discount_amount)}")
        print(f"  due upfront: {format_price(pricing.upfront_total)}")
    return 0


def _run_download(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    proposal = load_proposal(args.proposal)
    settings = PaginationSettings(
        profile=resolve_page_profile(args.page_size),
        theme=resolve_theme(profile=args.theme_profile, theme_file=args.theme_file),
        footer=None if args.no_footer else FOOTER_TEXT,
        asset_root=args.asset_root,
        resource_timeout=args.timeout,
    )
    destination = asyncio.run(
        download_proposal(proposal, settings=settings, directory=args.output_dir, logo=args.logo)
    )
    print(f"Generated proposal at: {destination}")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv_list = list(sys.argv[1:] if argv is None else argv)
    parser = _build_arg_parser()
    args = parser.parse_args(argv_list)

    handlers = {"create": _run_create, "show": _run_show, "download": _run_download}
    try:
        return handlers[args.command](args)
    except (ValueError, OSError, PaginationError) as exc:
        parser.exit(status=2, message=f"error: {exc}\n")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
