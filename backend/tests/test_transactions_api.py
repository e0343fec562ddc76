"""
Test suite for the transactions API endpoints.
The OCR engine is replaced through FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from txocr.main import app
from txocr.routers.transactions import UNRECOGNIZED_MESSAGE, get_ocr_service
from txocr.services.ocr import OCRError


STORE_RECEIPT = """\
SENIAT
Factura: 00012345
TOTAL Bs 45.652,00
01/02/2026 13:12
"""


class FakeOCR:
    """Stands in for Tesseract: returns canned text or raises."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def extract_text_from_image(self, image_data):
        self.calls += 1
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_ocr(fake):
    app.dependency_overrides[get_ocr_service] = lambda: fake
    return fake


def upload(client, content_type="image/png", data=b"\x89PNG fake"):
    return client.post(
        "/transactions/scan",
        files={"file": ("receipt.png", data, content_type)},
    )


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"


class TestScan:
    """POST /transactions/scan"""

    def test_recognized_receipt(self, client):
        ocr = use_ocr(FakeOCR(text=STORE_RECEIPT))

        response = upload(client)

        assert response.status_code == 200
        data = response.json()
        assert data["recipe_name"] == "store-receipt"
        assert data["complete"] is True
        assert data["transaction_id"] == "00012345"
        assert data["timestamp"] == "2026-02-01T13:12:00"
        assert data["currency"] == "VES"
        assert data["raw_text"] == STORE_RECEIPT
        assert data["message"] == "Recognized store-receipt: Bs 45.652,00"
        assert ocr.calls == 1

    def test_unrecognized_text_is_not_an_error(self, client):
        use_ocr(FakeOCR(text="foto borrosa ~~ ##"))

        response = upload(client)

        assert response.status_code == 200
        data = response.json()
        assert data["complete"] is False
        assert data["recipe_name"] is None
        assert data["amount"] is None
        assert data["raw_text"] == "foto borrosa ~~ ##"
        assert data["message"] == UNRECOGNIZED_MESSAGE

    def test_unreadable_image(self, client):
        use_ocr(FakeOCR(error=OCRError("cannot identify image file")))

        response = upload(client)

        assert response.status_code == 422
        assert response.json()["detail"] == "Could not read image"

    def test_rejects_non_image(self, client):
        ocr = use_ocr(FakeOCR(text=STORE_RECEIPT))

        response = upload(client, content_type="application/pdf")

        assert response.status_code == 400
        assert ocr.calls == 0

    def test_rejects_oversized_upload(self, client, monkeypatch):
        from txocr.config import settings
        monkeypatch.setattr(settings, "MAX_UPLOAD_MB", 0)
        use_ocr(FakeOCR(text=STORE_RECEIPT))

        response = upload(client)

        assert response.status_code == 400
        assert "too large" in response.json()["detail"]


class TestParseText:
    """POST /transactions/parse-text"""

    def test_parses_stored_text(self, client):
        response = client.post("/transactions/parse-text", json={"text": STORE_RECEIPT})

        assert response.status_code == 200
        data = response.json()
        assert data["recipe_name"] == "store-receipt"
        assert data["complete"] is True

    def test_unrecognized(self, client):
        response = client.post("/transactions/parse-text", json={"text": "hola"})

        assert response.status_code == 200
        assert response.json()["message"] == UNRECOGNIZED_MESSAGE

    def test_requires_text(self, client):
        response = client.post("/transactions/parse-text", json={})
        assert response.status_code == 422
