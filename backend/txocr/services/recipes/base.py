"""
Recipe contract shared by every receipt family.

A recipe owns a cheap detector, an extractor and its own completeness rule.
Recipes are stateless: patterns are compiled once at construction and reused.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from txocr.utils.money import parse_amount
from txocr.utils.patterns import PatternSpec, first_match

logger = logging.getLogger(__name__)

# Numerals as printed on receipts. The trailing (?!\d) keeps "1,250.75"
# from matching as the Venezuelan "1,25".
VE_NUMERAL = r'(\d{1,3}(?:\.\d{3})*,\d{2})(?!\d)'          # 45.652,00
US_NUMERAL = r'(\d{1,3}(?:,\d{3})*\.\d{2})(?!\d)'          # 45,652.00
MULTI_DOT_NUMERAL = r'(\d{1,3}(?:\.\d{3})+\.\d{2})(?!\d)'  # 6.775.90

# Currency marker (bolívares)
BS = r'Bs\.?'


@dataclass(frozen=True)
class RecipeResult:
    """Fields extracted by a single recipe attempt. Missing fields are None."""
    timestamp: Optional[datetime] = None
    amount: Optional[Decimal] = None
    transaction_id: Optional[str] = None
    currency: Optional[str] = None


class TransactionRecipe:
    """
    Interface for receipt recipes.

    Subclasses implement the three hooks; the pipeline calls ``extract`` only
    after ``can_handle`` accepted the text, and keeps the result only if
    ``is_valid`` accepts it.
    """

    name: str = ''

    def can_handle(self, text: str) -> bool:
        """Quick keyword check. Must be fast and side-effect free."""
        raise NotImplementedError

    def extract(self, text: str) -> RecipeResult:
        raise NotImplementedError

    def is_valid(self, result: RecipeResult) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def match_amount(patterns: Iterable[PatternSpec], text: str) -> Optional[Decimal]:
    """First structural match wins; its numeral goes through parse_amount."""
    found = first_match(patterns, text)
    if found is None:
        return None

    spec, match = found
    amount = parse_amount(match.group(1))
    if amount is None:
        logger.warning(f"Amount matched by '{spec.name}' is unparseable: {match.group(1)!r}")
    return amount


def match_reference(patterns: Iterable[PatternSpec], text: str) -> Optional[str]:
    """Return the digits captured by the first matching reference pattern."""
    found = first_match(patterns, text)
    if found is None:
        return None
    return found[1].group(1)


def reference_patterns(
    invoice: int,
    ticket: int,
    number: int,
    reference: int,
    lot: int
) -> List[PatternSpec]:
    """
    Build the labelled reference-number cascade with per-label minimum digits.

    Order: invoice, ticket/voucher, "number", reference, operation, lot.
    Operation labels share the reference minimum.
    """
    return [
        PatternSpec(
            name='invoice_number',
            pattern=r'Factura[\s:]*(?:N[°ºo]\.?\s*)?(\d{%d,})' % invoice,
            example='Factura: 00012345',
            notes='Invoice number (highest priority)',
        ),
        PatternSpec(
            name='ticket_number',
            pattern=r'(?:Ticket|Boleta)[\s:]*(\d{%d,})' % ticket,
            example='Ticket: 123456',
        ),
        PatternSpec(
            name='generic_number',
            pattern=r'(?:Nro\.?|N[úu]mero)[\s:]*(\d{%d,})' % number,
            example='Nro. 123456',
        ),
        PatternSpec(
            name='reference',
            pattern=r'(?:Ref\.?|Referencia)[\s:]*(\d{%d,})' % reference,
            example='Referencia: 789012',
        ),
        PatternSpec(
            name='operation',
            pattern=r'(?:Operaci[óo]n|Transacci[óo]n|Comprobante)[\s:]*(\d{%d,})' % reference,
            example='Operación: 456789',
        ),
        PatternSpec(
            name='lot_number',
            pattern=r'Lote[\s:]*(\d{%d,})' % lot,
            example='Lote: 1234',
        ),
    ]
