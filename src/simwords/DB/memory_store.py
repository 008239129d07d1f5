# DB/memory_store.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import GRAM
from ..errors import IndexReadError
from .api import WordSequence
from .postings import build_postings


class MemoryWordIndex:
    """In-memory index (useful for tests or ephemeral runs)."""

    def __init__(self, words: Optional[Iterable[str]] = None, *, gram: int = GRAM) -> None:
        self.gram = gram
        self._words: List[str] = list(words or [])
        self._grams: Dict[str, List[int]] = {}
        self._lengths: Dict[int, List[int]] = {}
        self._closed = False
        self._reindex()

    def _reindex(self) -> None:
        grams, lengths = build_postings(self._words, self.gram)
        self._grams = grams
        self._lengths = lengths

    # ---- read API ----
    def size(self) -> int:
        self._check_open()
        return len(self._words)

    def get(self, wid: int) -> str:
        self._check_open()
        return self._words[int(wid)]

    def iter_words(self) -> WordSequence:
        self._check_open()
        return WordSequence(self)

    def ids_for_gram(self, gram: str) -> Sequence[int]:
        self._check_open()
        return self._grams.get(gram, [])

    def ids_for_length(self, n: int) -> Sequence[int]:
        self._check_open()
        return self._lengths.get(int(n), [])

    # ---- lifecycle ----
    def close(self) -> None:
        self._closed = True
        self._words = []
        self._grams.clear()
        self._lengths.clear()

    def _check_open(self) -> None:
        if self._closed:
            raise IndexReadError("Index is closed")

    def __enter__(self) -> "MemoryWordIndex":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
