# models.py
#   The document tree produced by the parser: Book -> Chapter -> Verse -> Word.
#   Each node owns its children; the *_id fields are back-references only.
#   Also holds the Strong's dictionary entry types used by strongs.py.

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class Word:
    """One tagged word occurrence inside a verse."""
    id: int
    verse_id: int
    text: str
    lemma: str = ""
    strong: str = ""
    morph: str = ""

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "verseId": self.verse_id,
            "text": self.text,
            "lemma": self.lemma,
            "strong": self.strong,
            "morph": self.morph,
        }


@dataclass
class Verse:
    # id restarts at 1 in every chapter, number is what the markup declared
    id: int
    chapter_id: int
    number: int
    words: List[Word] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "chapterId": self.chapter_id,
            "number": self.number,
            "words": [w.to_dict() for w in self.words],
        }


@dataclass
class Chapter:
    id: int
    book_id: int
    number: int
    verses: List[Verse] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "bookId": self.book_id,
            "number": self.number,
            "verses": [v.to_dict() for v in self.verses],
        }


@dataclass
class Book:
    id: int
    title: str = ""
    chapters: List[Chapter] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return sum(len(v.words) for c in self.chapters for v in c.verses)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "chapters": [c.to_dict() for c in self.chapters],
        }


# --- Strong's dictionary entries ---

@dataclass
class Sense:
    number: str = ""
    definition: str = ""
    citations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"number": self.number, "definition": self.definition, "citations": list(self.citations)}


@dataclass
class WordEntry:
    """A Strong's number with its numbered senses."""
    word: str = ""
    strong: str = ""
    senses: List[Sense] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"word": self.word, "strong": self.strong, "senses": [s.to_dict() for s in self.senses]}

    @classmethod
    def from_dict(cls, data: Dict) -> "WordEntry":
        # LLM replies are loose JSON, so every field is optional
        senses = []
        for s in data.get("senses") or []:
            if not isinstance(s, dict):
                continue
            senses.append(Sense(
                number=str(s.get("number") or ""),
                definition=str(s.get("definition") or ""),
                citations=[str(c) for c in s.get("citations") or []],
            ))
        return cls(word=str(data.get("word") or ""), strong=str(data.get("strong") or ""), senses=senses)
