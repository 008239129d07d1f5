from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Union

from . import config as CFG
from .edits import first_diff_pos, levenshtein
from .keyboard import KeyboardDistance, get_layout
from .models import Candidate, SimilarWord

log = logging.getLogger(__name__)


class TypoScorer:
    """
    Keeps the candidates that look like a single keystroke error of the query
    and scores them by key distance.

    For each candidate c of query q:
      1. p = first position where they differ (ignoring case, char by char)
      2. same length and no such position: c equals q ignoring case -> skipped
      3. p > min(len(q), len(c)) - 1 -> rejected (c only extends q, or q
         extends c); switch off with reject_prefix_extensions=False
      4. case-sensitive Levenshtein(q, c) > max_distance -> rejected
      5. same length -> keyboard distance of q[p], c[p]; otherwise 0.0

    Output follows candidate order unless sort_by_distance is set, in which
    case it is stably sorted by ascending distance.
    """

    def __init__(
        self,
        keyboard: Optional[KeyboardDistance] = None,
        *,
        max_distance: int = CFG.MAX_TYPO_DISTANCE,
        reject_prefix_extensions: bool = CFG.REJECT_PREFIX_EXTENSIONS,
        sort_by_distance: bool = CFG.SORT_BY_DISTANCE,
    ) -> None:
        self.keyboard = keyboard if keyboard is not None else get_layout(
            CFG.DEFAULT_LAYOUT, unknown_distance=CFG.UNKNOWN_KEY_DISTANCE)
        self.max_distance = max_distance
        self.reject_prefix_extensions = reject_prefix_extensions
        self.sort_by_distance = sort_by_distance

    def accept(self, query: str, candidate: str) -> Optional[int]:
        """Return the first differing position if candidate passes the filters, else None."""
        pos = first_diff_pos(query, candidate)
        if len(query) == len(candidate) and pos == len(query):
            return None
        if self.reject_prefix_extensions and pos > min(len(query), len(candidate)) - 1:
            return None
        if levenshtein(query, candidate) > self.max_distance:
            return None
        return pos

    def score(self, query: str, candidate: str, pos: int) -> float:
        if len(query) != len(candidate):
            return 0.0
        return float(self.keyboard.distance(query[pos], candidate[pos]))

    def filter_and_score(self, query: str,
                         candidates: Iterable[Union[str, Candidate]]) -> List[SimilarWord]:
        out: List[SimilarWord] = []
        for cand in candidates:
            word = cand.word if isinstance(cand, Candidate) else cand
            pos = self.accept(query, word)
            if pos is None:
                continue
            out.append(SimilarWord(self.score(query, word, pos), query, word))
        if self.sort_by_distance:
            out.sort(key=lambda r: r.distance)
        log.debug("filter_and_score(%r): %d kept", query, len(out))
        return out


def filter_and_score(query: str, candidates: Iterable[str],
                     keyboard: Optional[KeyboardDistance] = None) -> List[SimilarWord]:
    return TypoScorer(keyboard).filter_and_score(query, candidates)
