from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, NamedTuple


@dataclass(frozen=True)
class Candidate:
    word: str
    cost: int            # weighted edit cost on lowercased forms
    shared_grams: int    # distinct padded q-grams shared with the query
    word_id: int


class SimilarWord(NamedTuple):
    distance: float
    query: str
    candidate: str

    def format(self) -> str:
        return f"{round(self.distance, 3)}; {self.query}; {self.candidate}"


@dataclass
class Vocabulary:
    words: list[str]

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)
