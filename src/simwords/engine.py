# simwords/engine.py
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from . import config as CFG
from .DB.api import WordStore
from .DB.index import build_index, open_index
from .DB.memory_store import MemoryWordIndex
from .errors import IndexReadError
from .keyboard import KeyboardDistance, get_layout
from .loader import load_words
from .models import SimilarWord
from .scorer import TypoScorer
from .search import Retriever

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the vocabulary index (on-disk WordIndex or in-memory MemoryWordIndex),
      - candidate retrieval (search.Retriever),
      - typo filtering and keyboard scoring (scorer.TypoScorer).

    Public API (used by the CLI):
      * build(word_file, location):  load words -> fresh index at location
      * build_from_words(words, location=None): same from a list; in memory when
                                      no location is given
      * load(location):              open an existing index
      * find_similar(query):         scored typo neighbours of one word
      * find_similar_many(queries):  the same for several words, streamed
      * find_similar_all():          every indexed word against the rest
      * shutdown():                  close the index
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        *,
        retriever: Optional[Retriever] = None,
        scorer: Optional[TypoScorer] = None,
        keyboard: Optional[KeyboardDistance] = None,
    ) -> None:
        self.retriever = retriever or Retriever()
        if scorer is None:
            scorer = TypoScorer(keyboard or get_layout(CFG.DEFAULT_LAYOUT,
                                                       unknown_distance=CFG.UNKNOWN_KEY_DISTANCE))
        self.scorer = scorer
        self.index: Optional[WordStore] = None

    # /* ~~~ Build a fresh index from a word list file ~~~ */
    def build(self, word_file: str, location: str) -> int:
        log.info("Loading words from %s", word_file)
        vocab = load_words(word_file)
        return self.build_from_words(vocab.words, location)

    def build_from_words(self, words: Iterable[str], location: Optional[str] = None) -> int:
        self.shutdown()
        if location is None:
            log.info("Building in-memory index")
            self.index = MemoryWordIndex(words, gram=CFG.GRAM)
        else:
            log.info("Building index at %s", location)
            self.index = build_index(words, location, gram=CFG.GRAM)
        n = self.index.size()
        log.info("Engine build() complete: words=%d", n)
        return n

    # /* ~~~ Open an already-built index ~~~ */
    def load(self, location: str) -> int:
        self.shutdown()
        self.index = open_index(location)
        n = self.index.size()
        log.info("Engine load() complete: words=%d", n)
        return n

    # ------------- query -------------

    def find_similar(self, query: str) -> List[SimilarWord]:
        index = self._require_index()
        candidates = self.retriever.retrieve(index, query)
        return self.scorer.filter_and_score(query, candidates)

    def find_similar_many(self, queries: Iterable[str]) -> Iterator[SimilarWord]:
        for q in queries:
            yield from self.find_similar(q)

    def find_similar_all(self) -> Iterator[SimilarWord]:
        index = self._require_index()
        done = 0
        for word in index.iter_words():
            yield from self.find_similar(word)
            done += 1
            if done % CFG.PROGRESS_EVERY_WORDS == 0:
                log.info("[queried] words=%s", f"{done:,}")

    def size(self) -> int:
        return self._require_index().size()

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self.index is not None:
                self.index.close()
        finally:
            self.index = None

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()

    # ------------- internals -------------

    def _require_index(self) -> WordStore:
        if self.index is None:
            raise IndexReadError("Engine not initialized. Call build() or load() first.")
        return self.index
