from __future__ import annotations
"""DocumentIngestor – uploaded file → embedded chunks in the knowledge store
-----------------------------------------------------------------------------
• Decodes the upload as UTF-8 text (best effort; binary formats are not parsed)
• Splits it into character windows (500 chars, 50 overlap by default)
• Embeds each window in order and appends it to the store as soon as its
  vector arrives; a chunk whose embedding fails is logged and skipped
• Returns an UploadedFile record with the number of chunks stored

Public API
~~~~~~~~~~
    await ingest(content, file_name, content_type, store)  -> UploadedFile
    await ingest_path(path, store)                         -> UploadedFile
"""

import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Callable, Optional

from support_rag import config
from support_rag.core.chunker import chunk_text
from support_rag.core.embeddings import OpenAIEmbedding
from support_rag.core.exceptions import EmbeddingError, IngestionError
from support_rag.core.schema import DocumentChunk, UploadedFile

__all__ = ["DocumentIngestor"]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


def _new_chunk_id() -> str:
    return uuid.uuid4().hex[:12]


class DocumentIngestor:
    """Turn uploaded files into embedded chunks, one file at a time."""

    def __init__(
        self,
        embedder: OpenAIEmbedding,
        chunk_size: int = config.CHUNK_SIZE,
        overlap: int = config.CHUNK_OVERLAP,
        delay_seconds: float = config.EMBED_DELAY_SECONDS,
    ):
        self.embedder = embedder
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.delay_seconds = delay_seconds

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    async def ingest(
        self,
        content: bytes | str,
        file_name: str,
        content_type: str,
        store,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadedFile:
        """Ingest an in‑memory file into *store*."""
        notify = on_progress or (lambda msg: None)
        async with store.write_lock:
            notify(f"Reading {file_name}...")
            text = self._decode(content, file_name, content_type, notify)
            size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)

            notify("Chunking text...")
            pieces = chunk_text(text, self.chunk_size, self.overlap)

            notify(f"Vectorizing {len(pieces)} chunks (this may take a moment)...")
            stored = await self._embed_and_store(pieces, file_name, store)

            file_info = UploadedFile(
                name=file_name,
                size=size,
                type=content_type,
                chunks_count=stored,
            )
            store.record_file(file_info)
            notify(f"Successfully processed {file_name} into {stored} knowledge vectors.")
            return file_info

    async def ingest_path(
        self,
        path: str | Path,
        store,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadedFile:
        path = Path(path)
        try:
            content = await asyncio.to_thread(path.read_bytes)
        except OSError as err:
            raise IngestionError("Failed to read file content", file_name=path.name) from err
        content_type = mimetypes.guess_type(path.name)[0] or "text/plain"
        return await self.ingest(content, path.name, content_type, store, on_progress)

    # ------------------------------------------------------------------
    # Private - decoding / embedding
    # ------------------------------------------------------------------

    @staticmethod
    def _decode(content: bytes | str, file_name: str, content_type: str, notify: ProgressCallback) -> str:
        if isinstance(content, str):
            text = content
        else:
            if content_type == "application/pdf":
                notify("Note: PDF detected. Attempting raw text extraction. For best results, convert to .txt")
            text = content.decode("utf-8", errors="replace")

        if not text.strip():
            raise IngestionError("File appears empty or content could not be read.", file_name=file_name)
        return text

    async def _embed_and_store(self, pieces: list[str], file_name: str, store) -> int:
        stored = 0
        for i, piece in enumerate(pieces):
            if i and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)
            try:
                embedding = await self.embedder.embed(piece)
            except EmbeddingError as err:
                logger.error("Failed to embed chunk %d of %s: %s", i, file_name, err)
                continue
            try:
                store.append(
                    DocumentChunk(id=_new_chunk_id(), source_file=file_name, text=piece, embedding=embedding)
                )
            except ValueError as err:
                logger.error("Rejected chunk %d of %s: %s", i, file_name, err)
                continue
            stored += 1
        logger.info("Stored %d/%d chunks for %s", stored, len(pieces), file_name)
        return stored
