# /app/services/dashboard_helpers/formatting.py

"""
Display formatting for the dashboard, following German conventions
(the record-storage service and its users are German-speaking).
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

PLACEHOLDER = "—"

# Short month names as the de locale abbreviates them.
GERMAN_MONTHS = [
    "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
    "Juli", "Aug.", "Sep.", "Okt.", "Nov.", "Dez.",
]


def format_currency(amount: Decimal) -> str:
    """Formats an amount as e.g. `1.234,50 €`."""
    rounded = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    # Format with English separators first, then swap them.
    english = f"{rounded:,.2f}"
    german = english.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{german} €"


def format_course_date(value: Optional[str]) -> str:
    """
    Formats a stored date as `dd. MMM yyyy`, e.g. `05. März 2026`.
    Only the date part of an ISO string is used. Unparseable values are
    returned unchanged so nothing is hidden from the user.
    """
    if not value:
        return PLACEHOLDER
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return f"{parsed.day:02d}. {GERMAN_MONTHS[parsed.month - 1]} {parsed.year}"


def format_payment_ratio(ratio: Optional[int]) -> str:
    if ratio is None:
        return PLACEHOLDER
    return f"{ratio} %"
