from __future__ import annotations
import logging
from collections import Counter
from typing import Dict, List, Optional

from . import config as CFG
from .DB.api import WordStore
from .edits import weighted_edit_distance
from .models import Candidate
from .normalize import fold, qgrams

log = logging.getLogger(__name__)


class Retriever:
    """
    Approximate lookup of vocabulary words within a weighted edit budget.

    Cost model (lowercased forms): a substitution costs `substitution_cost`,
    a missing or extra character costs `indel_cost`. With the defaults
    (1, 2, budget 2) a candidate may differ by up to two substitutions or by
    a single insertion/deletion.

    Candidates come from the index's padded q-gram postings. Every edit
    destroys at most q of the query's grams, so a word within budget shares
    at least `grams(query) - k*q` of them; when that bound drops below one
    for some candidate length, the index's length table is scanned for that
    length instead. Recall is exact under the cost model.
    """

    def __init__(
        self,
        *,
        max_edit_distance: int = CFG.MAX_EDIT_DISTANCE,
        limit: int = CFG.RESULT_LIMIT,
        substitution_cost: int = CFG.SUBSTITUTION_COST,
        indel_cost: int = CFG.INDEL_COST,
    ) -> None:
        if max_edit_distance < 0:
            raise ValueError("max_edit_distance must be >= 0")
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if substitution_cost <= 0 or indel_cost <= 0:
            raise ValueError("edit costs must be positive")
        self.max_edit_distance = max_edit_distance
        self.limit = limit
        self.substitution_cost = substitution_cost
        self.indel_cost = indel_cost

    @property
    def max_length_diff(self) -> int:
        return self.max_edit_distance // self.indel_cost

    def max_edits(self, length_diff: int) -> int:
        """Most single-character edits a candidate with this length difference can carry."""
        left = self.max_edit_distance - length_diff * self.indel_cost
        if left < 0:
            return -1
        return length_diff + left // self.substitution_cost

    # ---- Candidates ----
    def candidate_ids(self, index: WordStore, query: str) -> Dict[int, int]:
        """
        Return {word_id: shared distinct q-grams} for every word that could be
        within budget, without reading any word. Kept: ids reaching the
        loosest count bound over the admissible lengths, plus every id of a
        length whose bound is below one. The length-exact bound and the edit
        cost are checked in retrieve().
        """
        n = len(fold(query))
        q_grams = qgrams(query, index.gram)
        repeats = len(q_grams) - len(set(q_grams))

        shared: Counter = Counter()
        for g in dict.fromkeys(q_grams):
            for wid in index.ids_for_gram(g):
                shared[wid] += 1

        out: Dict[int, int] = {}
        bounds: List[int] = []
        for diff in range(self.max_length_diff + 1):
            bound = self._min_shared(len(q_grams), diff, index.gram)
            if bound >= 1:
                bounds.append(bound)
                continue
            # lengths the gram filter cannot vouch for
            for L in {n - diff, n + diff}:
                if L < 0:
                    continue
                for wid in index.ids_for_length(L):
                    out[wid] = shared.get(wid, 0)

        if bounds:
            lo = min(bounds) - repeats
            for wid, n_shared in shared.items():
                if n_shared >= lo:
                    out.setdefault(wid, n_shared)
        return out

    def _min_shared(self, n_grams: int, length_diff: int, gram: int) -> int:
        k = self.max_edits(length_diff)
        if k < 0:
            return n_grams + 1
        return n_grams - k * gram

    # ---- Query ----
    def retrieve(self, index: WordStore, query: str, *, limit: Optional[int] = None) -> List[Candidate]:
        """
        Up to `limit` candidate words for query, best first: ascending edit
        cost, then more shared grams, then storage order. The query itself and
        duplicate entries are returned like any other match.
        """
        limit = self.limit if limit is None else limit
        if not query or limit <= 0:
            return []

        q = fold(query)
        n = len(q)
        q_grams = qgrams(query, index.gram)
        repeats = len(q_grams) - len(set(q_grams))

        rows: List[Candidate] = []
        for wid, n_shared in self.candidate_ids(index, query).items():
            word = index.get(wid)
            w = fold(word)
            diff = abs(len(w) - n)
            if diff > self.max_length_diff:
                continue
            bound = self._min_shared(len(q_grams), diff, index.gram)
            if bound >= 1 and n_shared < bound - repeats:
                continue
            cost = weighted_edit_distance(
                q, w,
                substitution=self.substitution_cost,
                indel=self.indel_cost,
                limit=self.max_edit_distance,
            )
            if cost is None:
                continue
            rows.append(Candidate(word=word, cost=cost, shared_grams=n_shared, word_id=wid))

        rows.sort(key=lambda c: (c.cost, -c.shared_grams, c.word_id))
        log.debug("retrieve(%r): %d within budget, returning %d", query, len(rows), min(len(rows), limit))
        return rows[:limit]


def retrieve(index: WordStore, query: str, max_edit_distance: int = CFG.MAX_EDIT_DISTANCE,
             limit: int = CFG.RESULT_LIMIT) -> List[str]:
    """Convenience: candidate words only, with the default cost model."""
    r = Retriever(max_edit_distance=max_edit_distance, limit=limit)
    return [c.word for c in r.retrieve(index, query)]
