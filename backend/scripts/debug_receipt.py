"""
Debug script to see what OCR extracted and which recipe (if any) matched.

Usage:
    python scripts/debug_receipt.py --image screenshot.png
    python scripts/debug_receipt.py --text ocr_dump.txt
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from txocr.services.ocr import OCRError, OCRService
from txocr.services.pipeline import TransactionOcrPipeline
from txocr.utils.money import format_amount

EXIT_RECOGNIZED = 0
EXIT_UNRECOGNIZED = 1
EXIT_UNREADABLE = 2


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the recipe pipeline on one receipt")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", type=Path, help="Receipt photo or payment screenshot")
    source.add_argument("--text", type=Path, help="File holding OCR text")
    args = parser.parse_args(argv)

    source_path = args.image or args.text
    try:
        if args.image:
            text = OCRService().extract_text_from_image(args.image.read_bytes())
        else:
            text = args.text.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Could not open {source_path}: {e.strerror}")
        return EXIT_UNREADABLE
    except OCRError as e:
        print(f"Could not read image: {e}")
        return EXIT_UNREADABLE

    print("EXTRACTED TEXT:")
    print("-" * 60)
    print(text)
    print("-" * 60)
    print(f"Text length: {len(text)} characters")

    output = TransactionOcrPipeline().parse(text)

    print("\n" + "=" * 60)
    print("PARSING ATTEMPT:")
    print("=" * 60)
    print(f"Recipe: {output.recipe_name or 'none (unrecognized)'}")
    print(f"Date: {output.timestamp}")
    print(f"Amount: {format_amount(output.amount, output.currency or 'VES')}")
    print(f"Transaction ID: {output.transaction_id}")
    print(f"Currency: {output.currency}")

    return EXIT_RECOGNIZED if output.recognized else EXIT_UNRECOGNIZED


if __name__ == "__main__":
    sys.exit(main())
