"""Compact URL-safe proposal ids.

A proposal id is ``base64url(JSON)`` with the padding stripped. The JSON payload
uses short keys so ids stay short enough to share as links::

    cn  customer name        sr  sales rep name
    co  company name         se  sales rep email
    t   template             ts  creation time, ms since the epoch
    a   selected agents      st  term options [{"t": term, "d": discount}]
    ct  legacy contract term
    d   legacy discount
"""

from __future__ import annotations

import base64
import binascii
import json
import time
from datetime import datetime, timezone
from typing import Any

from .models import ProposalConfig, TermOption

ID_LENGTH = 12


def encode_proposal(
    *,
    customer_name: str,
    company_name: str,
    template: str,
    selected_agents: tuple[str, ...] | list[str],
    contract_term: str,
    sales_rep_name: str,
    sales_rep_email: str,
    discount_percentage: float = 0.0,
    selected_terms: tuple[TermOption, ...] = (),
    created_at: datetime | None = None,
) -> str:
    """Encode a proposal configuration into a URL-safe string."""
    timestamp = created_at.timestamp() if created_at is not None else time.time()
    payload: dict[str, Any] = {
        "cn": customer_name,
        "co": company_name,
        "t": template,
        "a": list(selected_agents),
        "ct": contract_term,
        "d": discount_percentage or 0,
        "sr": sales_rep_name,
        "se": sales_rep_email,
        "ts": int(timestamp * 1000),
    }
    if selected_terms:
        payload["st"] = [{"t": option.term, "d": option.discount_percentage} for option in selected_terms]
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_proposal(encoded: str) -> ProposalConfig | None:
    """Decode an id produced by :func:`encode_proposal`.

    Returns ``None`` for anything that is not a well-formed proposal id.
    """
    if not isinstance(encoded, str) or not encoded:
        return None
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None

    try:
        selected_terms = tuple(
            TermOption(term=item["t"], discount_percentage=float(item.get("d") or 0))
            for item in payload.get("st") or ()
        )
        config = ProposalConfig(
            id=encoded[:ID_LENGTH],
            customer_name=str(payload["cn"]),
            company_name=str(payload["co"]),
            template=payload["t"],
            selected_agents=tuple(payload["a"]),
            contract_term=payload.get("ct") or (selected_terms[0].term if selected_terms else "monthly"),
            discount_percentage=float(payload.get("d") or 0),
            selected_terms=selected_terms,
            sales_rep_name=str(payload.get("sr", "")),
            sales_rep_email=str(payload.get("se", "")),
            created_at=datetime.fromtimestamp(int(payload["ts"]) / 1000, tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError):
        return None
    return config
