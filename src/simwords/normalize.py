from __future__ import annotations
from .config import GRAM, PAD_START, PAD_END


def clean_line(raw: str) -> str:
    """Strip the line terminator and trailing whitespace; keep everything else."""
    return raw.rstrip("\r\n").rstrip()


def fold(word: str) -> str:
    """Case-insensitive matching form."""
    return word.lower()


def padded(word: str) -> str:
    return f"{PAD_START}{fold(word)}{PAD_END}"


def qgrams(word: str, q: int = GRAM) -> list[str]:
    """
    Return the q-grams of the lowercased, boundary-padded word, in order and
    with repeats (a word of length n yields n + 1 bigrams).
    """
    s = padded(word)
    if q <= 0 or len(s) < q:
        return []
    return [s[i:i+q] for i in range(len(s) - q + 1)]


def split_query_words(arg: str) -> list[str]:
    """Split a comma-separated query list; empty items are ignored."""
    return [w for w in arg.split(",") if w]
