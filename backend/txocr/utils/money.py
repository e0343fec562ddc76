"""
Shared money parsing utilities for Venezuelan receipts.

Terminals and printers encode the same-looking numeral with contradictory
separator conventions:
- Venezuelan: 1.234,56 (dot thousands, comma decimal)
- US: 1,234.56 or an already-clean 1234.56
- Multi-dot thermal printers: 6.775.90 (last dot is the decimal point)
"""

from decimal import Decimal, InvalidOperation
from typing import Optional


def parse_amount(amount_str: str) -> Optional[Decimal]:
    """
    Parse a numeral already isolated by a recipe pattern.

    Args:
        amount_str: Raw numeric substring (e.g., "45.652,00", "1,234.56")

    Returns:
        Decimal amount or None if the numeral is unparseable

    Examples:
        >>> parse_amount("1.234,56")
        Decimal('1234.56')
        >>> parse_amount("1,234.56")
        Decimal('1234.56')
        >>> parse_amount("6.775.90")
        Decimal('6775.90')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    cleaned = amount_str.strip()

    if _is_venezuelan(cleaned):
        cleaned = _normalize_venezuelan(cleaned)
    elif cleaned.count('.') >= 2:
        cleaned = _normalize_multi_dot(cleaned)
    else:
        cleaned = cleaned.replace(',', '')

    try:
        return Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None


def _is_venezuelan(amount_str: str) -> bool:
    """A comma is the decimal mark unless a dot follows it (1,234.56 is US)."""
    if ',' not in amount_str:
        return False
    return amount_str.rfind(',') > amount_str.rfind('.')


def _normalize_venezuelan(amount_str: str) -> str:
    """Dots are thousands separators, the last comma is the decimal point."""
    without_dots = amount_str.replace('.', '')
    head, _, decimals = without_dots.rpartition(',')
    return head + '.' + decimals


def _normalize_multi_dot(amount_str: str) -> str:
    """Every dot but the final one groups thousands."""
    parts = amount_str.split('.')
    decimals = parts.pop()
    return ''.join(parts) + '.' + decimals


def format_amount(amount: Optional[Decimal], currency: str = 'VES') -> str:
    """
    Format a canonical amount in Venezuelan notation for confirmation messages.

    Examples:
        >>> format_amount(Decimal('45652'))
        'Bs 45.652,00'
        >>> format_amount(Decimal('12.5'), 'USD')
        'USD 12,50'
    """
    if amount is None:
        return 'N/A'

    symbol = 'Bs' if currency.upper() == 'VES' else currency.upper()

    # Format US-style, then swap separators
    formatted = f"{amount:,.2f}"
    formatted = formatted.replace(',', '_').replace('.', ',').replace('_', '.')

    return f"{symbol} {formatted}"
