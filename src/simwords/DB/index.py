from __future__ import annotations
import logging
import os
from typing import Iterable, List, Optional, Sequence

from .. import config as CFG
from ..errors import IndexReadError, IOFailure, NotFoundError
from .acx import ACXIndex, ACXWriter
from .api import WordSequence
from .postings import build_postings
from .storage import discard, make_staging_dir, publish, read_meta, write_meta
from .wordsdb import WordsDB

log = logging.getLogger(__name__)


class WordIndex:
    """
    On-disk vocabulary index: the word records plus q-gram and length postings.
    Opened read-only; records and postings are memory-mapped, only the
    offset tables and keys live in Python.

    Directory layout:
      meta.json    format, version, gram size, word count
      words.wdb    word records in build order
      grams.acx    padded q-gram -> word ids
      lengths.acx  word length (decimal) -> word ids
    """

    def __init__(self, location: str) -> None:
        self.location = os.path.abspath(location)
        meta = read_meta(self.location)
        self.gram: int = meta["gram"]
        self._words: Optional[WordsDB] = None
        self._grams: Optional[ACXIndex] = None
        self._lengths: Optional[ACXIndex] = None
        try:
            self._words = WordsDB(os.path.join(self.location, CFG.WORDS_FILE))
            self._grams = ACXIndex(os.path.join(self.location, CFG.GRAMS_FILE))
            self._lengths = ACXIndex(os.path.join(self.location, CFG.LENGTHS_FILE))
        except FileNotFoundError as exc:
            self.close()
            raise IndexReadError(f"Incomplete index in {self.location}: {exc.filename} is missing") from exc
        except OSError as exc:
            self.close()
            raise IndexReadError(f"Cannot read index in {self.location}: {exc}") from exc
        except BaseException:
            self.close()
            raise

        if self._words.count() != meta["words"]:
            n = self._words.count()
            self.close()
            raise IndexReadError(
                f"Index in {self.location} is inconsistent: "
                f"{n} records but metadata says {meta['words']}"
            )
        if self._grams.k != self.gram:
            self.close()
            raise IndexReadError(f"Gram size mismatch in {self.location}")
        log.info("Opened index %s: words=%d grams=%d", self.location, self.size(), len(self._grams))

    # ---- Build (offline) ----
    @classmethod
    def build(cls, words: Iterable[str], destination: str, *, gram: int = CFG.GRAM) -> "WordIndex":
        """
        Build a fresh index at destination from words (order and duplicates
        kept) and return it opened. Anything already at destination is
        removed; the new index only becomes visible once fully written.
        """
        items: List[str] = list(words)
        staging = make_staging_dir(destination)
        try:
            log.info("Writing %d word records", len(items))
            WordsDB.build_from_words(items, os.path.join(staging, CFG.WORDS_FILE))

            log.info("Building %d-gram postings", gram)
            grams, lengths = build_postings(items, gram)
            ACXWriter(k=gram).save(os.path.join(staging, CFG.GRAMS_FILE), grams.items())
            ACXWriter(k=0).save(
                os.path.join(staging, CFG.LENGTHS_FILE),
                ((str(n), ids) for n, ids in lengths.items()),
            )
            write_meta(staging, words=len(items), gram=gram)
            log.info("Index built: words=%d grams=%d lengths=%d", len(items), len(grams), len(lengths))
        except OSError as exc:
            discard(staging)
            raise IOFailure(f"Cannot write index for {destination}: {exc}") from exc
        except BaseException:
            discard(staging)
            raise

        try:
            publish(staging, destination)
        except IOFailure:
            discard(staging)
            raise
        return cls(destination)

    # ---- read API ----
    def size(self) -> int:
        return self._require(self._words).count()

    def get(self, wid: int) -> str:
        return self._require(self._words).get_word(wid)

    def iter_words(self) -> WordSequence:
        self._require(self._words)
        return WordSequence(self)

    def ids_for_gram(self, gram: str) -> Sequence[int]:
        return self._require(self._grams).get(gram)

    def ids_for_length(self, n: int) -> Sequence[int]:
        return self._require(self._lengths).get(str(int(n)))

    # ---- lifecycle ----
    def close(self) -> None:
        for attr in ("_words", "_grams", "_lengths"):
            part = getattr(self, attr, None)
            if part is not None:
                try:
                    part.close()
                finally:
                    setattr(self, attr, None)

    @property
    def closed(self) -> bool:
        return self._words is None

    def _require(self, part):
        if part is None:
            raise IndexReadError(f"Index {self.location} is closed")
        return part

    def __enter__(self) -> "WordIndex":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"words={self.size()}"
        return f"WordIndex({self.location!r}, {state})"


def build_index(words: Iterable[str], destination: str, *, gram: int = CFG.GRAM) -> WordIndex:
    return WordIndex.build(words, destination, gram=gram)


def open_index(location: str) -> WordIndex:
    """Open an index built by build_index(); NotFoundError if there is none."""
    if not os.path.exists(location):
        raise NotFoundError(f"No index at {location}")
    return WordIndex(location)
