"""
Test suite for the debug_receipt operator script.
"""

from scripts import debug_receipt
from txocr.services.ocr import OCRError


STORE_RECEIPT = """\
SENIAT
Factura: 00012345
TOTAL Bs 45.652,00
01/02/2026 13:12
"""


class TestDebugReceipt:

    def test_text_file_recognized(self, tmp_path, capsys):
        path = tmp_path / "ocr.txt"
        path.write_text(STORE_RECEIPT, encoding="utf-8")

        assert debug_receipt.main(["--text", str(path)]) == debug_receipt.EXIT_RECOGNIZED

        out = capsys.readouterr().out
        assert "Recipe: store-receipt" in out
        assert "Amount: Bs 45.652,00" in out
        assert "Transaction ID: 00012345" in out

    def test_text_file_unrecognized(self, tmp_path, capsys):
        path = tmp_path / "ocr.txt"
        path.write_text("nada legible", encoding="utf-8")

        assert debug_receipt.main(["--text", str(path)]) == debug_receipt.EXIT_UNRECOGNIZED
        assert "unrecognized" in capsys.readouterr().out

    def test_unreadable_image(self, tmp_path, monkeypatch, capsys):
        class BrokenOCR:
            def extract_text_from_image(self, image_data):
                raise OCRError("cannot identify image file")

        monkeypatch.setattr(debug_receipt, "OCRService", BrokenOCR)
        path = tmp_path / "photo.png"
        path.write_bytes(b"junk")

        assert debug_receipt.main(["--image", str(path)]) == debug_receipt.EXIT_UNREADABLE
        assert "Could not read image" in capsys.readouterr().out

    def test_missing_text_file(self, tmp_path, capsys):
        path = tmp_path / "missing.txt"

        assert debug_receipt.main(["--text", str(path)]) == debug_receipt.EXIT_UNREADABLE
        assert "Could not open" in capsys.readouterr().out

    def test_missing_image_file(self, tmp_path, capsys):
        path = tmp_path / "missing.png"

        assert debug_receipt.main(["--image", str(path)]) == debug_receipt.EXIT_UNREADABLE
        assert "Could not open" in capsys.readouterr().out
