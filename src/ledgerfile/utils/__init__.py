"""Utility functions for ledgerfile."""

from ledgerfile.utils.date_parser import parse_date
from ledgerfile.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
