"""
OCR service for extracting text from receipt photos and payment screenshots.
"""

import io
import logging
from typing import Optional

import pytesseract
from PIL import Image, ImageEnhance

from txocr.config import settings

logger = logging.getLogger(__name__)


class OCRError(Exception):
    """The image could not be read (bad file or OCR engine failure)."""


class OCRService:
    """Service for extracting text from transaction images."""

    # Assume a single uniform block of text
    TESSERACT_CONFIG = r'--oem 3 --psm 6'

    def __init__(self, tesseract_cmd: Optional[str] = None, language: Optional[str] = None):
        """Initialize OCR service with Tesseract configuration."""
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd or settings.TESSERACT_CMD
        self.language = language or settings.OCR_LANGUAGE

    def extract_text_from_image(self, image_data: bytes) -> str:
        """
        Extract text from an image using Tesseract OCR.

        Args:
            image_data: Raw image bytes (JPEG, PNG, etc.)

        Returns:
            Extracted text, or "" when the image holds no readable text

        Raises:
            OCRError: if the image cannot be decoded or Tesseract fails
        """
        logger.info(f"Starting OCR on {len(image_data)} byte image")

        try:
            image = Image.open(io.BytesIO(image_data))
            image = self._preprocess_image(image)

            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self.TESSERACT_CONFIG,
            )
        except (OSError, RuntimeError) as e:
            # UnidentifiedImageError and TesseractNotFoundError are OSErrors,
            # TesseractError is a RuntimeError
            logger.error(f"OCR failed: {e}")
            raise OCRError(f"Could not read image: {e}") from e

        text = text.strip()
        if not text:
            logger.warning("No text detected in image")
        else:
            logger.info(f"OCR extracted text ({len(text)} chars)")

        return text

    def _preprocess_image(self, image: Image.Image) -> Image.Image:
        """
        Preprocess image to improve OCR accuracy.

        Args:
            image: PIL Image object

        Returns:
            Preprocessed image
        """
        # Convert to RGB if needed (drops alpha from PNG screenshots)
        if image.mode != 'RGB':
            image = image.convert('RGB')

        # Convert to grayscale
        image = image.convert('L')

        # Increase contrast, helps with faded thermal paper
        enhancer = ImageEnhance.Contrast(image)
        return enhancer.enhance(2.0)
