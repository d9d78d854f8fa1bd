from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class DocumentChunk:
    id: str
    source_file: str     # uploaded file name
    text: str
    embedding: List[float] = field(repr=False)


@dataclass(frozen=True)
class ScoredChunk:
    chunk: DocumentChunk
    score: float


@dataclass
class UploadedFile:
    name: str
    size: int
    type: str
    chunks_count: int
    processed: bool = True


@dataclass
class KnowledgeBaseSnapshot:
    total_chunks: int
    files: List[UploadedFile]
    chunks_by_source: Dict[str, int]
