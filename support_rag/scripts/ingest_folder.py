"""Ingest a folder of text files and ask a few questions against it.

    python -m support_rag.scripts.ingest_folder data/knowledge "What gold purity does Oriana offer?"

Environment variables
---------------------
OPENAI_API_KEY    – OpenAI key for embeddings and generation
"""
import os
import asyncio
import logging
import sys
from pathlib import Path

os.environ["OPENAI_LOG"] = "error"

from support_rag import config
from support_rag.core.exceptions import SupportRagError
from support_rag.rag.knowledge_store import InMemoryKnowledgeStore
from support_rag.services import build_services

LOGGER = logging.getLogger("ingest_folder")

ALLOWED_EXT = {".txt", ".md", ".csv", ".json"}


def list_files(folder: Path) -> list[Path]:
    """Every supported file under *folder* (recursive), sorted by path."""
    return sorted(p for p in folder.rglob("*") if p.is_file() and p.suffix.lower() in ALLOWED_EXT)


async def run(folder: Path, questions: list[str]) -> int:
    services = build_services(config.OPENAI_API_KEY)
    store = InMemoryKnowledgeStore()

    for path in list_files(folder):
        LOGGER.info("Processing %s", path)
        try:
            info = await services.ingestor.ingest_path(path, store, on_progress=LOGGER.info)
        except SupportRagError as err:
            LOGGER.error("Failed to process %s: %s", path, err)
            continue
        LOGGER.info("  ↳ stored %d chunks", info.chunks_count)

    print(f"Knowledge base holds {len(store)} chunks from {len(store.files())} files.")

    for i, q in enumerate(questions, 1):
        print(f"\n=== Q{i}: {q} ===")
        try:
            answer = await services.pipeline.answer(q, store)
        except SupportRagError as err:
            LOGGER.error("Question failed: %s", err)
            answer = config.CHAT_FAILURE_MESSAGE
        print(f"A{i}: {answer}\n")
    return len(store)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: ingest_folder FOLDER [QUESTION ...]")
        return 2

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    for name in ["httpx", "openai", "urllib3"]:
        logging.getLogger(name).setLevel(logging.CRITICAL)

    asyncio.run(run(Path(argv[0]), argv[1:]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
