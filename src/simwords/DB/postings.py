# DB/postings.py
from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from ..normalize import fold, qgrams


def build_postings(words: Iterable[str], gram: int) -> Tuple[Dict[str, List[int]], Dict[int, List[int]]]:
    """
    Build the two lookup tables for a word list:
      - gram   -> ascending ids of words containing that padded q-gram
      - length -> ascending ids of words with that many (lowercased) characters
    Ids are storage positions; duplicates keep their own ids.
    """
    grams: Dict[str, List[int]] = defaultdict(list)
    lengths: Dict[int, List[int]] = defaultdict(list)
    for wid, word in enumerate(words):
        for g in dict.fromkeys(qgrams(word, gram)):
            grams[g].append(wid)
        lengths[len(fold(word))].append(wid)
    return dict(grams), dict(lengths)
