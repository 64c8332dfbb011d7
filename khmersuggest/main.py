"""Entry point for khmersuggest.

Usage:
    khmersuggest "hello suo"                  # suggestions for the word at the end
    khmersuggest "suo hello" --cursor 3       # word ending at character 3
    khmersuggest "ស្រsuo" --composing "ស្រsuo" --cursor -1  # no caret info
    khmersuggest "hello suo" --accept 2       # teach the engine the 2nd choice
"""
import sys
import logging
import argparse

from khmersuggest import __version__
from khmersuggest.buffer import BufferSnapshot
from khmersuggest.config import Config
from khmersuggest.engine import EngineError
from khmersuggest.provider import SuggestionProvider, build_engine

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="khmersuggest",
        description="Roman → Khmer transliteration suggestions",
    )
    parser.add_argument("text", help="Full editor text")
    parser.add_argument("--cursor", type=int, default=None,
                        help="Caret position (default: end of text, -1: no selection)")
    parser.add_argument("--composing", default="",
                        help="Composing text reported by the editor")
    parser.add_argument("--max", type=int, default=None, dest="max_count",
                        help="Maximum number of suggestions")
    parser.add_argument("--accept", type=int, default=None, metavar="N",
                        help="Accept the N-th suggestion (1-based)")
    parser.add_argument("--engine", choices=("local", "api"), default=None,
                        help="Override the configured engine")
    parser.add_argument("--locale", default="km",
                        help="Locale tag of the active subtype")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version",
                        version=f"khmersuggest {__version__}")
    return parser


def format_candidate(rank: int, candidate) -> str:
    mark = "  [auto]" if candidate.auto_commit_eligible else ""
    return (f"{rank}. {candidate.display_text}  ({candidate.romanization})"
            f"  {candidate.confidence:.2f}{mark}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = Config(args.config)
    setup_logging(args.debug or config.debug_logging)

    provider = SuggestionProvider(build_engine(config, args.engine), config)
    if not provider.supports_locale(args.locale):
        print(f"Locale {args.locale!r} is not enabled for Khmer suggestions", file=sys.stderr)
        return 1

    cursor = len(args.text) if args.cursor is None else args.cursor
    buffer = BufferSnapshot(
        full_text=args.text,
        composing_text=args.composing,
        selection_start=cursor,
        selection_end=cursor,
    )
    max_count = args.max_count if args.max_count is not None else config.max_candidates

    provider.create()
    try:
        provider.preload(args.locale)
        candidates = provider.suggest(buffer, max_count)
        if not candidates:
            print("No suggestions")
            return 0
        for rank, candidate in enumerate(candidates, 1):
            print(format_candidate(rank, candidate))

        if args.accept is not None:
            if not 1 <= args.accept <= len(candidates):
                print(f"No suggestion number {args.accept}", file=sys.stderr)
                return 1
            chosen = candidates[args.accept - 1]
            provider.notify_suggestion_accepted(chosen)
            print(f"Accepted {chosen.display_text} for {chosen.romanization}")
        return 0
    except EngineError as e:
        logger.error("Engine unavailable: %s", e)
        print(f"Engine unavailable: {e}", file=sys.stderr)
        return 1
    finally:
        provider.destroy()


if __name__ == "__main__":
    sys.exit(main())
