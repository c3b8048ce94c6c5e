# check_books.py
# Reads exported book JSON files and reports anything that breaks the
# id rules: verse ids restart at 1 per chapter, word ids run 1..n across
# the whole book, and every back-reference points at its parent.
import json
import sys
from pathlib import Path
from typing import Dict, List

BOOK_KEYS = ["id", "title", "chapters"]
CHAPTER_KEYS = ["id", "bookId", "number", "verses"]
VERSE_KEYS = ["id", "chapterId", "number", "words"]
WORD_KEYS = ["id", "verseId", "text", "lemma", "strong", "morph"]


def _missing(obj: Dict, keys: List[str]) -> List[str]:
    return [k for k in keys if k not in obj]


def check_book(book: Dict) -> List[str]:
    """Returns a list of human readable problems, empty if the book is clean."""
    issues = []

    missing = _missing(book, BOOK_KEYS)
    if missing:
        return [f"book: missing keys - {', '.join(missing)}"]

    expected_chapter_id = 1
    expected_word_id = 1

    for chapter in book["chapters"]:
        missing = _missing(chapter, CHAPTER_KEYS)
        if missing:
            issues.append(f"chapter {chapter.get('number', '?')}: missing keys - {', '.join(missing)}")
            continue

        where = f"chapter {chapter['number']}"
        if chapter["id"] != expected_chapter_id:
            issues.append(f"{where}: id {chapter['id']}, expected {expected_chapter_id}")
        if chapter["bookId"] != book["id"]:
            issues.append(f"{where}: bookId {chapter['bookId']} does not match book {book['id']}")
        expected_chapter_id = chapter["id"] + 1

        expected_verse_id = 1
        for verse in chapter["verses"]:
            missing = _missing(verse, VERSE_KEYS)
            if missing:
                issues.append(f"{where} verse {verse.get('number', '?')}: missing keys - {', '.join(missing)}")
                continue

            vwhere = f"{where} verse {verse['number']}"
            if verse["id"] != expected_verse_id:
                issues.append(f"{vwhere}: id {verse['id']}, expected {expected_verse_id}")
            if verse["chapterId"] != chapter["id"]:
                issues.append(f"{vwhere}: chapterId {verse['chapterId']} does not match chapter {chapter['id']}")
            expected_verse_id = verse["id"] + 1

            for word in verse["words"]:
                missing = _missing(word, WORD_KEYS)
                if missing:
                    issues.append(f"{vwhere}: word missing keys - {', '.join(missing)}")
                    continue
                if word["id"] != expected_word_id:
                    issues.append(f"{vwhere}: word id {word['id']}, expected {expected_word_id}")
                if word["verseId"] != verse["id"]:
                    issues.append(f"{vwhere}: word {word['id']} has verseId {word['verseId']}")
                if not isinstance(word["text"], str):
                    issues.append(f"{vwhere}: word {word['id']} has non-string text")
                elif not word["text"].strip():
                    issues.append(f"{vwhere}: word {word['id']} has empty text")
                expected_word_id = word["id"] + 1

    return issues


def check_book_file(file_path: Path) -> List[str]:
    try:
        book = json.loads(file_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        return [f"not UTF-8 - {e}"]
    except json.JSONDecodeError as e:
        return [f"invalid JSON - {e}"]
    if not isinstance(book, dict):
        return ["top level is not an object"]
    return check_book(book)


def main(paths: List[str]) -> int:
    files = []
    for p in map(Path, paths):
        files.extend(sorted(p.glob("*.json")) if p.is_dir() else [p])

    issue_count = 0
    for file_path in files:
        if not file_path.exists():
            print(f"ERROR: File not found at {file_path}")
            issue_count += 1
            continue
        for issue in check_book_file(file_path):
            print(f"{file_path.name}: {issue}")
            issue_count += 1

    print(f"--- Check complete. {len(files)} files, {issue_count} potential issues. ---")
    return 1 if issue_count else 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python tools/check_books.py <output_dir_or_json_file> [...]")
        sys.exit(1)
    sys.exit(main(sys.argv[1:]))
