from __future__ import annotations
import logging
import os
from typing import Iterator, List

from .config import PROGRESS_EVERY_WORDS
from .errors import IOFailure
from .models import Vocabulary
from .normalize import clean_line

log = logging.getLogger(__name__)


def iter_word_lines(path: str) -> Iterator[str]:
    """
    Yield one word per non-blank line of a UTF-8 word list, with the line
    terminator and trailing whitespace removed. A leading BOM is dropped.
    """
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            for raw in f:
                word = clean_line(raw)
                if word:
                    yield word
    except UnicodeDecodeError as exc:
        raise IOFailure(f"{path} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise IOFailure(f"Cannot read word list {path}: {exc}") from exc


def load_words(path: str) -> Vocabulary:
    """Read a word list in file order; duplicates are kept."""
    if os.path.isdir(path):
        raise IOFailure(f"Word list {path} is a directory")
    words: List[str] = []
    for word in iter_word_lines(path):
        words.append(word)
        if len(words) % PROGRESS_EVERY_WORDS == 0:
            log.info("[loaded] words=%s", f"{len(words):,}")
    log.info("Loaded %d words from %s", len(words), path)
    return Vocabulary(words=words)
