"""
Retriever for the in-memory knowledge store.

Scores every stored chunk against the query vector (linear scan), keeps the
top ``k`` and drops anything scoring below ``threshold``. The threshold
suppresses low-confidence context so the generator falls back to its
out-of-scope answer instead of guessing.
"""

import logging
from typing import Callable, List, Optional, Sequence

from support_rag import config
from support_rag.core.schema import DocumentChunk, ScoredChunk
from support_rag.core.similarity import cosine_similarity

logger = logging.getLogger(__name__)

Scorer = Callable[[Sequence[float], Sequence[float]], float]


class Retriever:
    def __init__(
        self,
        k: int = config.RETRIEVAL_TOP_K,
        threshold: float = config.RETRIEVAL_SCORE_THRESHOLD,
        scorer: Scorer = cosine_similarity,
    ):
        self.k = k
        self.threshold = threshold
        self.scorer = scorer

    def retrieve_scored(
        self,
        query_vector: Sequence[float],
        store,
        k: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> List[ScoredChunk]:
        """Top-k chunks with their scores, best first, none below threshold."""
        k = self.k if k is None else k
        threshold = self.threshold if threshold is None else threshold
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        chunks = store.all()
        if not chunks:
            return []

        scored = [ScoredChunk(chunk=c, score=self.scorer(query_vector, c.embedding)) for c in chunks]
        # sorted() is stable, so equal scores keep insertion order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)[:k]
        kept = [s for s in ranked if s.score >= threshold]

        logger.info(
            "Scanned %d chunks, %d of top %d passed threshold %.2f",
            len(chunks), len(kept), len(ranked), threshold,
        )
        return kept

    def retrieve(
        self,
        query_vector: Sequence[float],
        store,
        k: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> List[DocumentChunk]:
        return [s.chunk for s in self.retrieve_scored(query_vector, store, k, threshold)]
