"""
Recipe for mini receipts (smaller format, thermal printers).

Format: "Monto Bs" or "Monto: Bs" instead of "Total Bs". This is the loosest
detector, so it is always tried last. Transaction ID is optional.
"""

import logging
import re

from txocr.services.recipes.base import (
    BS,
    MULTI_DOT_NUMERAL,
    US_NUMERAL,
    VE_NUMERAL,
    RecipeResult,
    TransactionRecipe,
    match_amount,
    match_reference,
    reference_patterns,
)
from txocr.utils.dates import THERMAL_DATETIME_RULES, parse_datetime
from txocr.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)

_AMOUNT_KEYWORD = re.compile(r'Monto', re.IGNORECASE)


class MiniReceiptRecipe(TransactionRecipe):
    """Generic fallback for small receipts. Requires only date and amount."""

    name = 'mini-receipt'

    def __init__(self):
        self._init_patterns()

    def _init_patterns(self):
        """Initialize regex patterns for parsing."""

        self.amount_patterns = [
            PatternSpec(
                name='monto_bs_venezuelan',
                pattern=r'Monto[\s:]*' + BS + r'\s+' + VE_NUMERAL,
                example='Monto Bs 1.234,56',
            ),
            PatternSpec(
                name='monto_bs_dot_venezuelan',
                pattern=r'Monto[\s:]+Bs\.\s*' + VE_NUMERAL,
                example='Monto: Bs.123,45',
            ),
            PatternSpec(
                name='monto_venezuelan',
                pattern=r'Monto[\s:]+' + VE_NUMERAL,
                example='Monto: 123,45',
                notes='No currency marker',
            ),
            PatternSpec(
                name='total_bs_venezuelan',
                pattern=r'(?:(?<!sub)Total|Importe|Valor)[\s:]*' + BS + r'\s+' + VE_NUMERAL,
                example='TOTAL Bs 45.652,00',
            ),
            PatternSpec(
                name='bs_venezuelan',
                pattern=BS + r'\s*' + VE_NUMERAL,
                example='Bs. 45.652,00',
            ),
            PatternSpec(
                name='bs_multi_dot',
                pattern=BS + r'\s*' + MULTI_DOT_NUMERAL,
                example='Bs 6.775.90',
                notes='Dots for both thousands and decimals (non-standard printers)',
            ),
            PatternSpec(
                name='monto_us',
                pattern=r'Monto[\s:]*(?:' + BS + r'\s*)?' + US_NUMERAL,
                example='Monto: Bs 1,234.56',
            ),
            PatternSpec(
                name='total_us',
                pattern=r'(?:(?<!sub)Total|Importe|Valor)[\s:]*(?:' + BS + r'\s*)?' + US_NUMERAL,
                example='Total 1,234.56',
            ),
        ]

        self.reference_patterns = reference_patterns(
            invoice=5,
            ticket=4,
            number=4,
            reference=4,
            lot=3,
        )

    def can_handle(self, text: str) -> bool:
        return bool(_AMOUNT_KEYWORD.search(text))

    def extract(self, text: str) -> RecipeResult:
        logger.info("Attempting to parse with mini-receipt recipe")

        result = RecipeResult(
            timestamp=parse_datetime(text, THERMAL_DATETIME_RULES),
            amount=match_amount(self.amount_patterns, text),
            transaction_id=match_reference(self.reference_patterns, text),
        )

        if result.timestamp is None:
            logger.warning("Could not extract datetime from mini receipt")
        if result.amount is None:
            logger.warning("Could not extract amount from mini receipt")
        if result.transaction_id is None:
            logger.info("Could not extract transaction ID from mini receipt (optional field)")

        return result

    def is_valid(self, result: RecipeResult) -> bool:
        # transaction_id is a nice-to-have here
        return (
            result.timestamp is not None and
            result.amount is not None
        )
