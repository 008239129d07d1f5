"""
simwords: typo-close word finder for spell-checker dictionary work.

For each query word, simwords looks up vocabulary words that are plausibly a
single keystroke error away and scores each pair by the physical distance of
the two differing keys on a keyboard layout (German QWERTZ by default).

The pieces:
- DB:       the vocabulary index (word records + q-gram and length postings),
            persisted to a directory and memory-mapped on open
- search:   candidate retrieval within a weighted edit budget
- scorer:   single-edit filtering and keyboard-distance scoring
- keyboard: pluggable key-distance models
- engine:   build / load / query orchestration used by the CLI

Example Usage:
    from simwords import Engine

    with Engine() as eng:
        eng.build_from_words(["haus", "maus", "house", "hausa"])
        for distance, query, candidate in eng.find_similar("haus"):
            print(f"{distance}; {query}; {candidate}")
"""

from .engine import Engine
from .models import SimilarWord
from .DB import build_index, open_index

__version__ = "1.0.0"
__all__ = ["Engine", "SimilarWord", "build_index", "open_index"]
