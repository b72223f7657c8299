"""Utility functions for ledgerchart."""

from ledgerchart.utils.date_parser import parse_date
from ledgerchart.utils.amount_parser import parse_amount
from ledgerchart.utils.maps import get_or_insert

__all__ = ["parse_date", "parse_amount", "get_or_insert"]
