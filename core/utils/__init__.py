"""
Core Utilities Package

This package contains utility functions and helpers used throughout the client.

Modules:
    - dates: Wire-format date formatting and parsing
"""

from core.utils.dates import format_wire_date, parse_wire_date

__all__ = ["format_wire_date", "parse_wire_date"]
