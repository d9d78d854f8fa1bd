"""Wiring of one embedding client, retriever, pipeline and ingestor per API key."""

import logging
from dataclasses import dataclass
from typing import Optional

from support_rag import config
from support_rag.core.embeddings import OpenAIEmbedding
from support_rag.core.exceptions import ConfigurationError
from support_rag.core.ingestion import DocumentIngestor
from support_rag.rag.rag_pipeline import RagPipeline
from support_rag.rag.retriever import Retriever

logger = logging.getLogger(__name__)


@dataclass
class SupportServices:
    embedder: OpenAIEmbedding
    retriever: Retriever
    pipeline: RagPipeline
    ingestor: DocumentIngestor


def build_services(api_key: Optional[str] = config.OPENAI_API_KEY) -> SupportServices:
    """Build a fresh set of clients for *api_key*; nothing is shared with earlier sets."""
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY is not configured")

    embedder = OpenAIEmbedding(api_key=api_key)
    retriever = Retriever()
    pipeline = RagPipeline(embedder=embedder, retriever=retriever, api_key=api_key)
    ingestor = DocumentIngestor(embedder=embedder)
    logger.info("Services built (embed=%s, generate=%s)", embedder.model, pipeline.model)
    return SupportServices(embedder=embedder, retriever=retriever, pipeline=pipeline, ingestor=ingestor)
