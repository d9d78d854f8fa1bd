from typing import List, Optional

from langfuse.openai import openai
import backoff

from support_rag import config
from support_rag.core.exceptions import ConfigurationError, EmbeddingError


class OpenAIEmbedding:
    """
    Thin async wrapper around the OpenAI v1 embeddings endpoint.

    One instance per configuration: chunk vectors and query vectors must come
    from the same instance so they stay comparable.

    Usage:
        embedder = OpenAIEmbedding(api_key="sk-...", model="text-embedding-3-small")
        vector   = await embedder.embed("hello")
    """
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = config.EMBED_MODEL,
        client: Optional[openai.AsyncClient] = None,
        timeout: float = config.OPENAI_TIMEOUT_SECONDS,
    ):
        self.model = model
        if client is None:
            if not api_key:
                raise ConfigurationError("OpenAI API key is not set; cannot create embedding client")
            client = openai.AsyncClient(api_key=api_key, timeout=timeout)
        self.client = client

    # automatic exponential back-off on rate-limit errors
    @backoff.on_exception(backoff.expo,
                          openai.RateLimitError,
                          max_tries=config.EMBED_MAX_TRIES)
    async def _create(self, inputs):
        return await self.client.embeddings.create(model=self.model, input=inputs)

    async def embed(self, text: str) -> List[float]:
        """
        Returns the embedding vector for a single text (one API call).
        """
        try:
            resp = await self._create(text)
        except openai.OpenAIError as err:
            raise EmbeddingError(f"Embedding request failed: {err}", model=self.model) from err

        data = getattr(resp, "data", None) or []
        vector = data[0].embedding if data else None
        if not vector:
            raise EmbeddingError("Embedding response contained no vector", model=self.model)
        return list(vector)

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """
        Returns one embedding vector per text, in the same order.
        """
        if not texts:
            return []
        try:
            resp = await self._create(texts)
        except openai.OpenAIError as err:
            raise EmbeddingError(f"Embedding request failed: {err}", model=self.model) from err

        # v1 returns resp.data[i].embedding
        vectors = [list(d.embedding) for d in resp.data]
        if len(vectors) != len(texts) or not all(vectors):
            raise EmbeddingError(
                "Embedding response is missing vectors",
                model=self.model,
                details={"expected": len(texts), "received": len(vectors)},
            )
        return vectors
