"""
Pydantic models for extracted transactions.
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal


class PipelineOutput(BaseModel):
    """
    Final answer of the recipe pipeline. Always produced.

    raw_text is kept even when nothing was recognized, for manual entry.
    """
    timestamp: Optional[datetime] = None
    amount: Optional[Decimal] = None
    transaction_id: Optional[str] = None
    currency: Optional[str] = None
    raw_text: str = ""
    recipe_name: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.recipe_name is not None


class ParseTextRequest(BaseModel):
    """Model for re-parsing stored OCR text."""
    text: str


class ScanResponse(PipelineOutput):
    """Model for scan/parse API responses."""
    complete: bool = False
    message: str = ""
