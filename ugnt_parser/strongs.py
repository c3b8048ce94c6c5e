# strongs.py
#   Converts the Strong's Greek lexicon (one markdown file per entry, e.g.
#   strong/G00110/01.md) into a single strong_output.json.
#
#   The default path is a plain text heuristic: grab the Strong's number and
#   every "Definition:" block, falling back to the matching "Glosses:" block
#   when a definition is empty. With use_llm=True each file goes through the
#   chat model instead (see llm.py).

import json
import logging
import re
from pathlib import Path
from typing import List, Union

from tqdm import tqdm

import config
import llm
from models import Sense, WordEntry

logger = logging.getLogger(__name__)

STRONG_RE = re.compile(r'Strongs: ([A-Z0-9]+)')
DEFINITION_LABEL = "Definition:"
GLOSSES_LABEL = "Glosses:"


def find_all_occurrences(text: str, word: str) -> List[int]:
    """Start offsets of every non-overlapping occurrence of `word` in `text`."""
    indexes = []
    offset = 0
    while True:
        i = text.find(word, offset)
        if i == -1:
            break
        indexes.append(i)
        offset = i + len(word)
    return indexes


def _section_text(md: str, label_index: int, label: str) -> str:
    # text after the label up to the next heading, or the next dash if there is no heading left
    rest = md[label_index + len(label):]
    end = rest.find("#")
    if end == -1:
        end = rest.find("-")
    if end == -1:
        end = len(rest)
    return rest[:end].strip()


def parse_markdown_to_word_entry(md: str) -> WordEntry:
    """Builds a WordEntry (Strong's number + one Sense per definition) from an entry's markdown."""
    entry = WordEntry()

    match = STRONG_RE.search(md)
    if match:
        entry.strong = match.group(1)

    definitions = [_section_text(md, i, DEFINITION_LABEL) for i in find_all_occurrences(md, DEFINITION_LABEL)]

    for i, gloss_index in enumerate(find_all_occurrences(md, GLOSSES_LABEL)):
        # a gloss only stands in for an empty definition at the same position
        if i >= len(definitions) or definitions[i]:
            continue
        gloss = _section_text(md, gloss_index, GLOSSES_LABEL)
        if gloss:
            definitions[i] = gloss

    entry.senses = [Sense(definition=d) for d in definitions]
    return entry


def read_all_markdown_files(source_dir: Union[str, Path]) -> List[str]:
    """Contents of every .md file under `source_dir`, walked in sorted order."""
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Strong's directory not found: {source_dir}")

    paths = sorted(p for p in source_dir.rglob("*.md") if p.is_file())
    return [p.read_text(encoding="utf-8") for p in paths]


def strongs_to_json(
    source_dir: Union[str, Path] = config.STRONG_DIR,
    output_dir: Union[str, Path] = config.STRONG_OUTPUT_DIR,
    use_llm: bool = False,
    client=None,
) -> List[WordEntry]:
    """
    Converts every markdown entry and writes them all to strong_output.json.
    Entries the LLM can't convert are logged and left out.
    """
    contents = read_all_markdown_files(source_dir)
    logger.info(f"Read {len(contents)} markdown files from {source_dir}")

    if use_llm:
        client = client or llm.get_client()

    entries = []
    for content in tqdm(contents, desc="Converting Strong's entries", disable=not use_llm):
        if use_llm:
            entry = llm.word_entry_from_llm(content, client)
        else:
            entry = parse_markdown_to_word_entry(content)

        if entry is None:
            continue
        entries.append(entry)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / config.STRONG_OUTPUT_FILE
    output_file.write_text(
        json.dumps([e.to_dict() for e in entries], ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )

    logger.info(f"Successfully written {len(entries)} entries to {output_file}")
    return entries
