# export.py
#   Writes each parsed Book to its own JSON file: output/<id>_<title>.json

import json
import logging
import re
from pathlib import Path
from typing import List, Union

import config
from models import Book

logger = logging.getLogger(__name__)


def book_filename(book: Book) -> str:
    """'<id>_<title>.json', or '<id>.json' for a book without a \\h title."""
    title = re.sub(r'[\\/]', '_', book.title.strip())
    if not title:
        return f"{book.id}.json"
    return f"{book.id}_{title}.json"


def export_books_to_json(books: List[Book], output_dir: Union[str, Path] = config.OUTPUT_DIR) -> List[Path]:
    """Writes one indented JSON file per book and returns the paths written."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for book in books:
        file_path = output_dir / book_filename(book)
        file_path.write_text(json.dumps(book.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info(f"Wrote {file_path}")
        written.append(file_path)

    return written
