from __future__ import annotations
import argparse
import logging
import sys
from typing import Iterable

from . import config as CFG
from .engine import Engine
from .errors import SimWordsError, UsageError
from .keyboard import LAYOUTS, get_layout
from .models import SimilarWord
from .normalize import split_query_words
from .scorer import TypoScorer
from .search import Retriever

PROG = "simwords"

USAGE = f"""\
Usage 1: {PROG} build <wordFile> <indexDir>
             builds a fresh index from <wordFile> (one word per line, UTF-8);
             anything already at <indexDir> is deleted first
Usage 2: {PROG} query <words> <indexDir>
             <indexDir> as created with usage 1
             <words> a comma-separated list of words to search similar words for (no spaces)
Usage 3: {PROG} query-all <indexDir>
             searches similar words for every word in the index
Output: one line per similar word: <distance>; <query>; <similar word>
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports mistakes as UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", action="store_true", help="Progress logging on stderr")

    tuning = argparse.ArgumentParser(add_help=False)
    tuning.add_argument("--limit", type=int, default=CFG.RESULT_LIMIT,
                        help="Candidates retrieved per query word")
    tuning.add_argument("--max-edits", type=int, default=CFG.MAX_EDIT_DISTANCE,
                        help="Weighted edit budget for retrieval (missing char = 2)")
    tuning.add_argument("--layout", choices=sorted(LAYOUTS), default=CFG.DEFAULT_LAYOUT,
                        help="Keyboard layout for key distances")
    tuning.add_argument("--unknown-key-distance", type=float, default=CFG.UNKNOWN_KEY_DISTANCE,
                        help="Distance for characters not on the layout (default: error)")
    tuning.add_argument("--sort", action="store_true",
                        help="Sort each query's results by ascending distance")
    tuning.add_argument("--keep-prefix-extensions", action="store_true",
                        help="Also report words that only extend the query at its end")

    p = _Parser(prog=PROG, description="Find typo-close words and score them by keyboard distance",
                usage=USAGE, add_help=True)
    sub = p.add_subparsers(dest="command", metavar="command")

    b = sub.add_parser("build", parents=[common], usage=USAGE, help="Build an index from a word list")
    b.add_argument("word_file")
    b.add_argument("index_dir")

    q = sub.add_parser("query", parents=[common, tuning], usage=USAGE, help="Query a comma-separated word list")
    q.add_argument("words")
    q.add_argument("index_dir")

    a = sub.add_parser("query-all", parents=[common, tuning], usage=USAGE, help="Query every indexed word")
    a.add_argument("index_dir")
    return p


def _make_engine(args: argparse.Namespace) -> Engine:
    if args.limit < 0 or args.max_edits < 0:
        raise UsageError("--limit and --max-edits must not be negative")
    keyboard = get_layout(args.layout, unknown_distance=args.unknown_key_distance)
    return Engine(
        retriever=Retriever(max_edit_distance=args.max_edits, limit=args.limit),
        scorer=TypoScorer(
            keyboard,
            reject_prefix_extensions=not args.keep_prefix_extensions,
            sort_by_distance=args.sort,
        ),
    )


def _print_rows(rows: Iterable[SimilarWord]) -> int:
    n = 0
    for r in rows:
        print(r.format())
        n += 1
    return n


def run(args: argparse.Namespace) -> int:
    if args.command == "build":
        with Engine() as eng:
            n = eng.build(args.word_file, args.index_dir)
        print(f"Index created: {n} docs", file=sys.stderr)
        return 0

    if args.command == "query":
        words = split_query_words(args.words)
        if not words:
            raise UsageError("no query words given")
        eng = _make_engine(args)
        with eng:
            eng.load(args.index_dir)
            _print_rows(eng.find_similar_many(words))
        return 0

    if args.command == "query-all":
        eng = _make_engine(args)
        with eng:
            eng.load(args.index_dir)
            _print_rows(eng.find_similar_all())
        return 0

    raise UsageError("missing command")


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = _build_parser()
    try:
        if not argv:
            raise UsageError("missing command")
        args = parser.parse_args(argv)
        if args.verbose:
            logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        return run(args)
    except UsageError as exc:
        print(USAGE, end="")
        print(f"error: {exc}")
        return 1
    except SimWordsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
