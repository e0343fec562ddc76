from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "TxOCR"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # OCR
    TESSERACT_CMD: str = "tesseract"
    OCR_LANGUAGE: str = "spa"  # Receipts and payment screenshots are in Spanish

    # Transactions
    LOCAL_CURRENCY: str = "VES"
    MAX_UPLOAD_MB: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
