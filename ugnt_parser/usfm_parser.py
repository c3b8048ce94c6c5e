# usfm_parser.py
#   Turns one UGNT .usfm file into a Book tree. This only understands the
#   markers the UGNT actually uses: \h (title), \c (chapter), \v (verse) and
#   inline \w word|attributes\w* tags. Everything else is ignored.
#
#   Structural problems (bad numbers, verse before chapter) raise
#   UsfmParseError and abort the file. Broken word tags are skipped.

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from models import Book, Chapter, Verse, Word

logger = logging.getLogger(__name__)

# --- markers ---
TITLE_MARKER = "\\h "
CHAPTER_MARKER = "\\c "
VERSE_MARKER = "\\v "
WORD_OPEN = "\\w "
WORD_CLOSE = "\\w*"

# attribute keys inside a word tag
LEMMA_KEY = "lemma="
STRONG_KEY = "strong="
MORPH_KEY = "x-morph="

# ascii digits only, str.isdigit() would also accept things like "²"
_INT_RE = re.compile(r"[+-]?[0-9]+")


class UsfmParseError(ValueError):
    """A structural error that makes the whole file unusable."""

    def __init__(self, line_number: int, reason: str, token: Optional[str] = None, filename: Optional[str] = None):
        super().__init__(line_number, reason, token)
        self.line_number = line_number
        self.reason = reason
        self.token = token
        self.filename = filename

    def __str__(self):
        msg = f"line {self.line_number}: {self.reason}"
        if self.token is not None:
            msg += f": {self.token}"
        if self.filename:
            msg = f"{self.filename}: {msg}"
        return msg


@dataclass
class Diagnostic:
    """Something we skipped over without failing."""
    line_number: int
    message: str
    filename: Optional[str] = None

    def __str__(self):
        where = f"{self.filename}: " if self.filename else ""
        return f"{where}line {self.line_number}: {self.message}"


@dataclass
class ParserState:
    # id counters: chapters and words never reset, verses restart per chapter
    chapter_id: int = 1
    verse_id: int = 1
    word_id: int = 1

    # positions in book.chapters / chapter.verses, None until opened
    current_chapter: Optional[int] = None
    current_verse: Optional[int] = None

    line_number: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def note(self, message: str):
        self.diagnostics.append(Diagnostic(self.line_number, message))


# --- attribute extraction ---

def extract_property(text: str, prop_name: str) -> str:
    """
    Returns the value of `prop_name` (e.g. 'lemma=') in an attribute string.

    Quoted values run to the next quote, unquoted ones to the next space.
    A missing key or an unterminated quote gives an empty string.
    """
    start = text.find(prop_name)
    if start == -1:
        return ""

    start += len(prop_name)
    if start >= len(text):
        return ""

    if text[start] == '"':
        end = text.find('"', start + 1)
        if end == -1:
            return ""
        return text[start + 1:end]

    end = text.find(" ", start)
    if end == -1:
        end = len(text)
    return text[start:end]


# --- word tags ---

def process_words(text: str, verse: Verse, state: ParserState) -> List[Word]:
    """
    Scans `text` for \\w ...|...\\w* tags and appends a Word to `verse` for each
    well-formed one, in order. Advances state.word_id once per word.
    """
    words = []

    # the piece before the first \w is never a word
    for part in text.split(WORD_OPEN)[1:]:
        if not part:
            continue

        pipe_index = part.find("|")
        if pipe_index == -1:
            state.note(f"word tag without '|' skipped: {part.strip()}")
            continue

        word_text = part[:pipe_index]
        word_props = part[pipe_index + 1:]

        end_index = word_props.find(WORD_CLOSE)
        if end_index == -1:
            state.note(f"word tag without closing marker skipped: {word_text}")
            continue
        word_props = word_props[:end_index]

        word = Word(
            id=state.word_id,
            verse_id=verse.id,
            text=word_text,
            lemma=extract_property(word_props, LEMMA_KEY),
            strong=extract_property(word_props, STRONG_KEY),
            morph=extract_property(word_props, MORPH_KEY),
        )
        verse.words.append(word)
        words.append(word)
        state.word_id += 1

    return words


# --- document ---

def _parse_number(token: str, reason: str, state: ParserState) -> int:
    if not _INT_RE.fullmatch(token.strip()):
        raise UsfmParseError(state.line_number, reason, token)
    return int(token)


def _parse_line(line: str, book: Book, state: ParserState):
    if line.startswith(TITLE_MARKER):
        book.title = line[len(TITLE_MARKER):].strip()
        return

    if line.startswith(CHAPTER_MARKER):
        number = _parse_number(line[len(CHAPTER_MARKER):], "invalid chapter number", state)

        book.chapters.append(Chapter(id=state.chapter_id, book_id=book.id, number=number))
        state.current_chapter = len(book.chapters) - 1
        state.current_verse = None
        state.chapter_id += 1
        state.verse_id = 1
        return

    if line.startswith(VERSE_MARKER):
        if state.current_chapter is None:
            raise UsfmParseError(state.line_number, "verse found before chapter")

        parts = line.split(" ", 2)
        if len(parts) < 2:
            raise UsfmParseError(state.line_number, "malformed verse line")
        number = _parse_number(parts[1], "invalid verse number", state)

        chapter = book.chapters[state.current_chapter]
        verse = Verse(id=state.verse_id, chapter_id=chapter.id, number=number)
        chapter.verses.append(verse)
        state.current_verse = len(chapter.verses) - 1
        state.verse_id += 1

        if len(parts) == 3 and WORD_OPEN in parts[2]:
            process_words(parts[2], verse, state)
        return

    if WORD_OPEN in line:
        if state.current_chapter is None:
            raise UsfmParseError(state.line_number, "word found before chapter")
        if state.current_verse is None:
            state.note("word tags between chapter marker and first verse dropped")
            return
        verse = book.chapters[state.current_chapter].verses[state.current_verse]
        process_words(line, verse, state)

    # blank lines and any other markers (\id, \p, \toc1, ...) fall through


def parse_usfm(lines: Union[str, Iterable[str]], book_id: int, diagnostics: Optional[List[Diagnostic]] = None) -> Book:
    """
    Builds a Book from USFM lines (an iterable of lines or one string).

    Raises UsfmParseError on the first structural error; nothing is returned
    in that case. Skipped word tags are appended to `diagnostics` if given.
    """
    if isinstance(lines, str):
        lines = lines.split("\n")

    book = Book(id=book_id)
    state = ParserState()

    for raw in lines:
        state.line_number += 1
        _parse_line(raw.rstrip("\r\n"), book, state)

    if state.diagnostics:
        logger.debug(f"Book {book_id} ({book.title or 'untitled'}): {len(state.diagnostics)} malformed fragments skipped")
    if diagnostics is not None:
        diagnostics.extend(state.diagnostics)

    return book


def parse_usfm_file(path: Union[str, Path], book_id: int, diagnostics: Optional[List[Diagnostic]] = None) -> Book:
    """
    Reads a .usfm file as UTF-8 and parses it. Errors and diagnostics carry
    the file name. Undecodable bytes are dropped rather than failing the file.
    """
    path = Path(path)
    found = []
    try:
        with path.open("r", encoding="utf-8", errors="ignore") as f:
            book = parse_usfm(f, book_id, found)
    except UsfmParseError as e:
        e.filename = path.name
        raise

    for d in found:
        d.filename = path.name
    if diagnostics is not None:
        diagnostics.extend(found)
    return book
