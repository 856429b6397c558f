"""
Recognize a book from cover OCR text.

Reads the text from a file (or stdin), runs the full recognition
pipeline against Google Books and prints the result as JSON.
"""

import argparse
import asyncio
import json
import os
import sys

from dotenv import load_dotenv

# Load env vars
load_dotenv()

from coverscan.identification.google_books import GoogleBooksClient
from coverscan.identification.service import CoverRecognitionService
from coverscan.recognition.lexicon import load_lexicon
from coverscan.recognition.text_parser import CandidateExtractor


async def recognize(text: str, max_results: int, lexicon_path: str = None) -> dict:
    client = GoogleBooksClient(api_key=os.getenv("GOOGLE_BOOKS_API_KEY"))
    extractor = CandidateExtractor(lexicon=load_lexicon(lexicon_path))
    service = CoverRecognitionService(client, extractor=extractor)

    result = await service.recognize(text, max_results=max_results)
    return result.to_dict()


def main():
    parser = argparse.ArgumentParser(description="Identify a book from cover OCR text")
    parser.add_argument("path", nargs="?", help="Text file with the OCR output (default: stdin)")
    parser.add_argument("--max-results", type=int, default=8, help="Maximum books to return")
    parser.add_argument("--lexicon", default=os.getenv("COVERSCAN_LEXICON_PATH"), help="YAML lexicon override")
    args = parser.parse_args()

    if args.max_results < 1:
        parser.error("--max-results must be at least 1")

    if args.path:
        with open(args.path, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    result = asyncio.run(recognize(text, args.max_results, args.lexicon))
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
