"""Utility functions for commtrack."""

from commtrack.utils.date_parser import parse_date, parse_month, parse_iso_date

__all__ = ["parse_date", "parse_month", "parse_iso_date"]
