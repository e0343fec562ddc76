"""
Recipe for store receipts printed by fiscal thermal printers.

Format: SENIAT header or a known retail-chain name, "TOTAL Bs" line, invoice
("Factura") number.
"""

import logging

from txocr.services.recipes.base import (
    BS,
    US_NUMERAL,
    VE_NUMERAL,
    RecipeResult,
    TransactionRecipe,
    match_amount,
    match_reference,
    reference_patterns,
)
from txocr.utils.dates import RECEIPT_DATETIME_RULES, parse_datetime
from txocr.utils.patterns import PatternSpec

logger = logging.getLogger(__name__)


class StoreReceiptRecipe(TransactionRecipe):
    """Fiscal store receipts. Requires date, amount and invoice number."""

    name = 'store-receipt'

    # Case-sensitive: printed in capitals on every receipt header
    STORE_MARKERS = (
        'SENIAT',
        'AUTOMERCADOS PLAZA',
        'PLAZAS GALERIAS',
    )

    def __init__(self):
        self._init_patterns()

    def _init_patterns(self):
        """Initialize regex patterns for parsing."""

        # Large gaps and line breaks between label and value are common
        # (space-between layout), hence \s+ rather than a single space
        self.amount_patterns = [
            PatternSpec(
                name='keyword_bs_venezuelan',
                pattern=r'(?:Monto|(?<!sub)Total|Importe|Valor)[\s:]*' + BS + r'\s+' + VE_NUMERAL,
                example='TOTAL Bs      26.364,61',
                notes='Keyword + Bs + Venezuelan format (excludes subtotal)',
            ),
            PatternSpec(
                name='pto_integrado',
                pattern=r'PTO\s+INTEGRADO\s+' + VE_NUMERAL,
                example='PTO INTEGRADO 26.364,61',
                notes='Integrated point-of-sale payment line',
            ),
            PatternSpec(
                name='keyword_us',
                pattern=r'(?:Monto|(?<!sub)Total|Importe|Valor)[\s:]*(?:' + BS + r'\s*)?' + US_NUMERAL,
                example='TOTAL Bs 26,364.61',
            ),
            PatternSpec(
                name='bs_venezuelan',
                pattern=BS + r'\s*' + VE_NUMERAL,
                example='Bs. 45.652,00',
            ),
            PatternSpec(
                name='bs_us',
                pattern=BS + r'\s*' + US_NUMERAL,
                example='Bs 45,652.00',
                notes='Last resort',
            ),
        ]

        self.reference_patterns = reference_patterns(
            invoice=5,
            ticket=6,
            number=6,
            reference=6,
            lot=4,
        )

    def can_handle(self, text: str) -> bool:
        return any(marker in text for marker in self.STORE_MARKERS)

    def extract(self, text: str) -> RecipeResult:
        logger.info("Attempting to parse with store-receipt recipe")

        result = RecipeResult(
            timestamp=parse_datetime(text, RECEIPT_DATETIME_RULES),
            amount=match_amount(self.amount_patterns, text),
            transaction_id=match_reference(self.reference_patterns, text),
        )

        if result.timestamp is None:
            logger.warning("Could not extract datetime from store receipt")
        if result.amount is None:
            logger.warning("Could not extract amount from store receipt")
        if result.transaction_id is None:
            logger.warning("Could not extract transaction ID from store receipt")

        return result

    def is_valid(self, result: RecipeResult) -> bool:
        # Without an invoice number the record cannot be deduplicated
        return (
            result.timestamp is not None and
            result.amount is not None and
            result.transaction_id is not None
        )
