# DB/api.py
from __future__ import annotations
from typing import Iterable, Iterator, Protocol, Sequence


class WordStore(Protocol):
    """Read API shared by the on-disk index and the in-memory one."""
    gram: int

    def size(self) -> int: ...
    def get(self, wid: int) -> str: ...
    def iter_words(self) -> Iterable[str]: ...
    def ids_for_gram(self, gram: str) -> Sequence[int]: ...
    def ids_for_length(self, n: int) -> Sequence[int]: ...
    def close(self) -> None: ...


class WordSequence:
    """
    Lazy, restartable view over a store's words in storage order.
    Every iteration starts again from the first record.
    """
    def __init__(self, store: WordStore) -> None:
        self._store = store

    def __iter__(self) -> Iterator[str]:
        for wid in range(self._store.size()):
            yield self._store.get(wid)

    def __len__(self) -> int:
        return self._store.size()

    def __repr__(self) -> str:
        return f"WordSequence(size={len(self)})"

