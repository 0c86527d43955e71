"""Budget -> restaurant price tier mapping."""

import re

from triptailor.shared.contracts.travel_details import NOT_SPECIFIED


LUXURY_THRESHOLD = 2000

_AMOUNT = re.compile(r"\d+(?:\.\d+)?")


def budget_price_tier(budget: str) -> str:
    """
    Map a free-form budget to a price tier.

    Amounts above 2000 are "luxury"; everything else, including the
    sentinel and unparsable text, is "mid-range".
    """
    if not budget or budget == NOT_SPECIFIED:
        return "mid-range"

    match = _AMOUNT.search(str(budget).replace(",", "").replace("$", ""))
    if not match:
        return "mid-range"

    return "luxury" if float(match.group()) > LUXURY_THRESHOLD else "mid-range"
