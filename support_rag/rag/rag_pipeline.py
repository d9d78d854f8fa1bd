import openai
import yaml
import logging
from typing import Optional

from support_rag import config
from support_rag.core.embeddings import OpenAIEmbedding
from support_rag.core.exceptions import ConfigurationError, GenerationError
from support_rag.rag.retriever import Retriever

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n---\n\n"


def load_prompts(path=config.PROMPT_PATH):
    """Loads prompts from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class RagPipeline:
    """
    An asynchronous RAG pipeline: embed the query, retrieve from the
    knowledge store, and ask the generation model to answer from that
    context only.
    """
    def __init__(
        self,
        embedder: OpenAIEmbedding,
        retriever: Optional[Retriever] = None,
        async_client: Optional[openai.AsyncClient] = None,
        api_key: Optional[str] = None,
        prompts: Optional[dict] = None,
        model: str = config.GENERATION_MODEL,
        temperature: float = config.GENERATION_TEMPERATURE,
    ):
        self.embedder = embedder
        self.retriever = retriever or Retriever()
        self.prompts = prompts or load_prompts()
        self.model = model
        self.temperature = temperature
        if async_client is None:
            if not api_key:
                raise ConfigurationError("OpenAI API key is not set; cannot create generation client")
            async_client = openai.AsyncClient(api_key=api_key, timeout=config.OPENAI_TIMEOUT_SECONDS)
        self.async_client = async_client

        logger.info("RagPipeline initialized (model=%s, k=%d, threshold=%.2f).",
                    self.model, self.retriever.k, self.retriever.threshold)

    @property
    def system_prompt(self) -> str:
        template = self.prompts["answer_generation"]["system_prompt"]
        return template.format(out_of_scope_message=config.OUT_OF_SCOPE_MESSAGE)

    @staticmethod
    def build_context(chunks) -> str:
        return CONTEXT_SEPARATOR.join(chunk.text for chunk in chunks)

    def build_messages(self, user_query: str, context_block: str) -> list[dict]:
        user_prompt = self.prompts["answer_generation"]["user_prompt_template"].format(
            query_text=user_query, context=context_block
        )
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    async def generate_answer(self, user_query: str, context_block: str) -> str:
        messages = self.build_messages(user_query, context_block)
        try:
            response = await self.async_client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
            )
        except openai.OpenAIError as e:
            raise GenerationError(f"Generation request failed: {e}", model=self.model) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            logger.warning("Generation returned no text; using apology message.")
            return config.APOLOGY_MESSAGE
        return content.strip()

    async def answer(self, user_query: str, store) -> str:
        """Runs the full pipeline and returns a single answer string."""
        if store.is_empty:
            return config.NO_KNOWLEDGE_MESSAGE

        query_vector = await self.embedder.embed(user_query)
        context_chunks = self.retriever.retrieve(query_vector, store)
        logger.info("RAG context found: %d chunks", len(context_chunks))

        context_block = self.build_context(context_chunks)
        return await self.generate_answer(user_query, context_block)
