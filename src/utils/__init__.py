from .account_summary import AccountSummary, compute_account_summary, render_account_summary
from .formatting import format_amount, format_bool, format_decimal

__all__ = [
    "AccountSummary",
    "compute_account_summary",
    "format_amount",
    "format_bool",
    "format_decimal",
    "render_account_summary",
]
