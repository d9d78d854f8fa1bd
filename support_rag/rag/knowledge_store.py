import asyncio
import logging
from collections import Counter
from typing import Dict, List, Optional, Tuple

from support_rag.core.schema import DocumentChunk, KnowledgeBaseSnapshot, UploadedFile

logger = logging.getLogger(__name__)


class InMemoryKnowledgeStore:
    """
    Append-only, insertion-ordered collection of embedded chunks.

    Lives for the process lifetime only. Retrieval scans ``all()`` linearly;
    an indexed backend can replace this class as long as it keeps the
    ``append`` / ``all`` contract.
    """

    def __init__(self):
        self._chunks: List[DocumentChunk] = []
        self._files: List[UploadedFile] = []
        self._dimension: Optional[int] = None
        # one ingestion at a time, across every ingestor writing here
        self.write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, chunk: DocumentChunk) -> None:
        """Add one chunk. Every embedding must share the store's dimension."""
        dim = len(chunk.embedding)
        if self._dimension is None:
            self._dimension = dim
        elif dim != self._dimension:
            raise ValueError(
                f"Embedding dimension {dim} does not match store dimension {self._dimension}"
            )
        self._chunks.append(chunk)

    def all(self) -> Tuple[DocumentChunk, ...]:
        """Snapshot of every chunk in insertion order."""
        return tuple(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    @property
    def is_empty(self) -> bool:
        return not self._chunks

    @property
    def dimension(self) -> Optional[int]:
        return self._dimension

    # ---- display metadata ---------------------------------------------

    def record_file(self, file_info: UploadedFile) -> None:
        self._files.append(file_info)
        logger.info("Recorded %s (%d chunks); store now holds %d chunks",
                    file_info.name, file_info.chunks_count, len(self._chunks))

    def files(self) -> List[UploadedFile]:
        return list(self._files)

    def counts_by_source(self) -> Dict[str, int]:
        return dict(Counter(c.source_file for c in self._chunks))

    def snapshot(self) -> KnowledgeBaseSnapshot:
        return KnowledgeBaseSnapshot(
            total_chunks=len(self._chunks),
            files=self.files(),
            chunks_by_source=self.counts_by_source(),
        )
