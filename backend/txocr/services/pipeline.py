"""
Recipe selection engine: turns OCR text into a transaction record.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from txocr.config import settings
from txocr.models.transaction import PipelineOutput
from txocr.services.recipes.base import TransactionRecipe
from txocr.services.recipes.mini_receipt import MiniReceiptRecipe
from txocr.services.recipes.pago_movil import PagoMovilRecipe
from txocr.services.recipes.store_receipt import StoreReceiptRecipe

logger = logging.getLogger(__name__)


def build_default_recipes(
    clock: Callable[[], datetime] = datetime.now
) -> List[TransactionRecipe]:
    """
    Recipes in priority order, most specific first.

    Pago Móvil must not be shadowed by the store markers, and the store
    markers must not be claimed by the loose "Monto" fallback.
    """
    return [
        PagoMovilRecipe(clock=clock),
        StoreReceiptRecipe(),
        MiniReceiptRecipe(),
    ]


class TransactionOcrPipeline:
    """
    First-match-wins cascade over an ordered list of recipes.

    No scoring: the first recipe that accepts the text and produces a valid
    result decides. Safe to share between callers; nothing is stored per call.
    """

    def __init__(
        self,
        recipes: Optional[Sequence[TransactionRecipe]] = None,
        default_currency: Optional[str] = None
    ):
        self.recipes = tuple(recipes) if recipes is not None else tuple(build_default_recipes())
        self.default_currency = default_currency or settings.LOCAL_CURRENCY

    def parse(self, text: str) -> PipelineOutput:
        """
        Run the recipe cascade over OCR text.

        Args:
            text: Raw OCR text

        Returns:
            PipelineOutput tagged with the winning recipe, or with every field
            None (raw_text preserved) when no recipe succeeded
        """
        text = text or ""

        for recipe in self.recipes:
            if not recipe.can_handle(text):
                logger.debug(f"Recipe {recipe.name} declined text")
                continue

            try:
                result = recipe.extract(text)
            except Exception:
                logger.exception(f"Recipe {recipe.name} failed while extracting")
                continue

            if not recipe.is_valid(result):
                logger.debug(f"Recipe {recipe.name} result incomplete, trying next recipe")
                continue

            output = PipelineOutput(
                timestamp=result.timestamp,
                amount=result.amount,
                transaction_id=result.transaction_id,
                currency=result.currency or self.default_currency,
                raw_text=text,
                recipe_name=recipe.name,
            )
            logger.info("Transaction recognized", extra={
                "recipe": recipe.name,
                "amount": str(output.amount),
                "transaction_id": output.transaction_id,
            })
            return output

        logger.warning("Could not recognize text as a known receipt type", extra={
            "text_length": len(text),
        })
        return PipelineOutput(raw_text=text)
