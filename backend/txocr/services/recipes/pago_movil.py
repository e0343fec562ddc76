"""
Recipe for Pago Móvil transactions.

Format: mobile payment screenshots with reference number and amount.
Applies a surcharge based on the sender's ID type (RIF vs Cédula).
"""

import logging
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from txocr.config import settings
from txocr.services.recipes.base import RecipeResult, TransactionRecipe
from txocr.utils.dates import PAYMENT_DATE_TIME, parse_datetime
from txocr.utils.money import parse_amount

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class PagoMovilRecipe(TransactionRecipe):
    """
    Mobile payment screenshots. Requires date, amount and reference.

    Checked first: its markers are the most distinctive, and records are
    deduplicated downstream by reference number.
    """

    name = 'pago-movil'

    RIF_SURCHARGE_MULTIPLIER = Decimal('1.015')     # 1.5%
    CEDULA_SURCHARGE_MULTIPLIER = Decimal('1.003')  # 0.3%

    # "Descargar" and "Compartir" buttons sit at the bottom of every screenshot
    DOWNLOAD_BUTTON = re.compile(r'Descargar', re.IGNORECASE)
    SHARE_BUTTON = re.compile(r'Compartir', re.IGNORECASE)

    REFERENCE = re.compile(r'(?:Referencia|Ref\.?)\s*[:.]?\s*(\d+)', re.IGNORECASE)
    AMOUNT = re.compile(r'Bs\.?\s*([\d.,]+)', re.IGNORECASE)
    RIF = re.compile(r'J-?\d{8,9}', re.IGNORECASE)
    CEDULA = re.compile(r'V-?\d{7,9}', re.IGNORECASE)

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        currency: Optional[str] = None
    ):
        """
        Args:
            clock: Source of "now" when the screenshot shows no date
            currency: Currency stamped on results (defaults to LOCAL_CURRENCY)
        """
        self._clock = clock
        self.currency = currency or settings.LOCAL_CURRENCY

    def can_handle(self, text: str) -> bool:
        if self.DOWNLOAD_BUTTON.search(text) and self.SHARE_BUTTON.search(text):
            return True

        # Fallback when the buttons are cropped out: reference + amount
        return bool(self.REFERENCE.search(text) and self.AMOUNT.search(text))

    def extract(self, text: str) -> RecipeResult:
        return RecipeResult(
            timestamp=self.extract_datetime(text),
            amount=self.extract_amount(text),  # Includes surcharge
            transaction_id=self.extract_transaction_id(text),
            currency=self.currency,
        )

    def is_valid(self, result: RecipeResult) -> bool:
        # All 3 fundamentals required for Pago Móvil
        return (
            result.timestamp is not None and
            result.amount is not None and
            result.transaction_id is not None
        )

    def extract_amount(self, text: str) -> Optional[Decimal]:
        """
        Base amount from the first "Bs" numeral, times the sender surcharge.

        Rounded half-up to cents.
        """
        match = self.AMOUNT.search(text)
        if not match:
            logger.warning("Could not find amount in Pago Móvil text")
            return None

        amount = parse_amount(match.group(1))
        if amount is None:
            logger.warning(f"Unparseable Pago Móvil amount: {match.group(1)!r}")
            return None

        # Bank debits are in whole cents
        return (amount * self.surcharge_multiplier(text)).quantize(CENTS, rounding=ROUND_HALF_UP)

    def surcharge_multiplier(self, text: str) -> Decimal:
        """RIF takes precedence over Cédula; unknown senders pay the Cédula rate."""
        if self.RIF.search(text):
            multiplier = self.RIF_SURCHARGE_MULTIPLIER
            logger.info(f"RIF detected, applying {(multiplier - 1) * 100}% surcharge")
        elif self.CEDULA.search(text):
            multiplier = self.CEDULA_SURCHARGE_MULTIPLIER
            logger.info(f"Cédula detected, applying {(multiplier - 1) * 100}% surcharge")
        else:
            multiplier = self.CEDULA_SURCHARGE_MULTIPLIER
            logger.info("No ID type detected, defaulting to Cédula surcharge")
        return multiplier

    def extract_transaction_id(self, text: str) -> Optional[str]:
        match = self.REFERENCE.search(text)
        if not match:
            logger.warning("Could not find reference number in Pago Móvil text")
            return None

        # Same reference shows up zero-padded or not depending on cropping
        return str(int(match.group(1)))

    def extract_datetime(self, text: str) -> Optional[datetime]:
        if not PAYMENT_DATE_TIME.date.search(text):
            logger.warning("Could not extract date from Pago Móvil, using current date")
            return self._clock()

        return parse_datetime(text, (PAYMENT_DATE_TIME,))
