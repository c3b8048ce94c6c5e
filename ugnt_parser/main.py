# main.py
#   Command line entry point.
#
#   ugnt-parse books    parse ugnt/*.usfm and write output/<id>_<title>.json
#   ugnt-parse strongs  convert the Strong's markdown lexicon to one JSON file

import argparse
import logging
import sys
from typing import List, Optional

import config
from corpus import CorpusParseError, parse_ugnt_files
from export import export_books_to_json
from strongs import strongs_to_json


def setup_logging(level: str = config.LOG_LEVEL):
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=config.LOG_FORMAT)


def run_books(args) -> int:
    logging.info("Parsing started")
    diagnostics = []
    try:
        books = parse_ugnt_files(args.source, args.ext, diagnostics=diagnostics, progress=True)
    except CorpusParseError as e:
        logging.error(f"Error parsing UGNT files: {e}")
        return 1

    if diagnostics:
        logging.warning(f"Skipped {len(diagnostics)} malformed word tags")
        for d in diagnostics:
            logging.debug(str(d))

    try:
        export_books_to_json(books, args.output)
    except OSError as e:
        logging.error(f"Error exporting books to JSON: {e}")
        return 1

    logging.info(f"Parsing completed successfully ({len(books)} books)")
    return 0


def run_strongs(args) -> int:
    try:
        strongs_to_json(args.source, args.output, use_llm=args.llm)
    except OSError as e:
        logging.error(f"Error converting Strong's entries: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ugnt-parse", description="Parse the UGNT Greek text and Strong's lexicon into JSON.")
    ap.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    sub = ap.add_subparsers(dest="command", required=True)

    books = sub.add_parser("books", help="parse .usfm files into one JSON file per book")
    books.add_argument("--source", default=config.UGNT_DIR, help="directory holding the .usfm files")
    books.add_argument("--output", default=config.OUTPUT_DIR, help="directory to write book JSON to")
    books.add_argument("--ext", default=config.USFM_EXTENSION, help="file extension to pick up")
    books.set_defaults(func=run_books)

    strongs = sub.add_parser("strongs", help="convert Strong's markdown entries to JSON")
    strongs.add_argument("--source", default=config.STRONG_DIR, help="directory holding the markdown entries")
    strongs.add_argument("--output", default=config.STRONG_OUTPUT_DIR, help="directory to write strong_output.json to")
    strongs.add_argument("--llm", action="store_true", help="use the configured LLM instead of the text heuristic")
    strongs.set_defaults(func=run_strongs)

    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level.upper())
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
