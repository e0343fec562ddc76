"""
Transactions API router: image scan and text re-parse.
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
import logging

from txocr.config import settings
from txocr.models.transaction import ParseTextRequest, PipelineOutput, ScanResponse
from txocr.services.ocr import OCRError, OCRService
from txocr.services.pipeline import TransactionOcrPipeline
from txocr.utils.money import format_amount

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
UNRECOGNIZED_MESSAGE = "Could not recognize this as a known receipt type"

_pipeline = TransactionOcrPipeline()


def get_ocr_service() -> OCRService:
    return OCRService()


def get_pipeline() -> TransactionOcrPipeline:
    # Recipes are stateless, one instance serves every request
    return _pipeline


def _to_response(output: PipelineOutput) -> ScanResponse:
    """Attach the human-facing confirmation message."""
    if output.recognized:
        message = (
            f"Recognized {output.recipe_name}: "
            f"{format_amount(output.amount, output.currency or settings.LOCAL_CURRENCY)}"
        )
    else:
        message = UNRECOGNIZED_MESSAGE

    return ScanResponse(
        **output.model_dump(),
        complete=output.recognized,
        message=message,
    )


@router.post("/scan", response_model=ScanResponse)
async def scan_transaction(
    file: UploadFile = File(...),
    ocr: OCRService = Depends(get_ocr_service),
    pipeline: TransactionOcrPipeline = Depends(get_pipeline),
):
    """
    Extract a transaction from a receipt photo or payment screenshot.

    This endpoint:
    1. Accepts an image upload (JPG, PNG, WEBP)
    2. Runs OCR once
    3. Runs the recipe pipeline on the OCR text
    4. Returns the extracted fields with the raw text for confirmation
    """
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {file.content_type}. Allowed: JPG, PNG, WEBP"
        )

    file_data = await file.read()
    file_size_mb = len(file_data) / (1024 * 1024)

    if file_size_mb > settings.MAX_UPLOAD_MB:
        raise HTTPException(
            status_code=400,
            detail=f"File too large: {file_size_mb:.2f}MB. Maximum: {settings.MAX_UPLOAD_MB}MB"
        )

    try:
        ocr_text = await run_in_threadpool(ocr.extract_text_from_image, file_data)
    except OCRError as e:
        logger.warning("OCR failed for uploaded image", extra={
            "filename": file.filename,
            "error": str(e),
        })
        raise HTTPException(status_code=422, detail="Could not read image")

    output = pipeline.parse(ocr_text)
    return _to_response(output)


@router.post("/parse-text", response_model=ScanResponse)
async def parse_text(
    request: ParseTextRequest,
    pipeline: TransactionOcrPipeline = Depends(get_pipeline),
):
    """Run the recipe pipeline on already-extracted OCR text."""
    output = pipeline.parse(request.text)
    return _to_response(output)
