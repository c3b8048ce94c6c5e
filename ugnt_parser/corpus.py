# corpus.py
#   Walks the UGNT directory and parses every .usfm file into a Book.
#   Book ids follow the sorted file names: 1, 2, 3, ...
#   One bad file stops the whole run, we never hand back half a corpus.

import logging
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

import config
from models import Book
from usfm_parser import Diagnostic, UsfmParseError, parse_usfm_file

logger = logging.getLogger(__name__)


class CorpusParseError(RuntimeError):
    """Raised when the corpus can't be read or one of its files fails to parse."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


def list_usfm_files(source_dir: Union[str, Path], extension: str = config.USFM_EXTENSION) -> List[Path]:
    """Returns the matching files in `source_dir`, sorted by name. Subdirectories are skipped."""
    source_dir = Path(source_dir)
    try:
        entries = sorted(source_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise CorpusParseError(f"error reading {source_dir} directory: {e}") from e

    return [p for p in entries if not p.is_dir() and p.name.endswith(extension)]


def parse_ugnt_files(
    source_dir: Union[str, Path] = config.UGNT_DIR,
    extension: str = config.USFM_EXTENSION,
    diagnostics: Optional[List[Diagnostic]] = None,
    progress: bool = False,
) -> List[Book]:
    """Parses every file in the corpus directory, in order, failing fast."""
    files = list_usfm_files(source_dir, extension)
    logger.info(f"Found {len(files)} {extension} files in {source_dir}")

    books = []
    book_id = 1
    for path in tqdm(files, desc="Parsing books", disable=not progress):
        try:
            book = parse_usfm_file(path, book_id, diagnostics)
        except (ValueError, OSError) as e:
            # UsfmParseError already names the file
            detail = str(e) if isinstance(e, UsfmParseError) else f"{path.name}: {e}"
            raise CorpusParseError(f"error parsing file {detail}", filename=path.name) from e

        logger.debug(f"Parsed {path.name} as book {book_id} '{book.title}' ({len(book.chapters)} chapters, {book.word_count} words)")
        books.append(book)
        book_id += 1

    return books
