"""
Test suite for RagPipeline (answer generation).

Covers the empty-store short-circuit, grounded prompt construction,
threshold-suppressed context, and failure handling of the generation call.
"""

import math

import pytest

from fakes import FakeCompletions, FakeEmbeddings, connection_error, make_fake_client, make_services
from support_rag import config
from support_rag.core.exceptions import ConfigurationError, EmbeddingError, GenerationError
from support_rag.core.schema import DocumentChunk
from support_rag.rag.rag_pipeline import CONTEXT_SEPARATOR, RagPipeline, load_prompts


class TestPromptConstruction:

    def test_system_prompt_should_carry_exact_out_of_scope_sentence(self, services) -> None:
        system_prompt = services.pipeline.system_prompt

        assert config.OUT_OF_SCOPE_MESSAGE in system_prompt
        assert "{out_of_scope_message}" not in system_prompt

    def test_system_prompt_should_state_formatting_and_language_rules(self, services) -> None:
        system_prompt = services.pipeline.system_prompt

        assert "Context Only" in system_prompt
        assert "bullet points" in system_prompt
        assert "SAME language" in system_prompt

    def test_user_turn_should_combine_context_and_query(self, services) -> None:
        messages = services.pipeline.build_messages("Do you ship abroad?", "Shipping is free.")

        assert [m["role"] for m in messages] == ["system", "user"]
        assert "Shipping is free." in messages[1]["content"]
        assert "User Question: Do you ship abroad?" in messages[1]["content"]

    def test_context_should_join_chunks_with_separator(self) -> None:
        chunks = [
            DocumentChunk(id="1", source_file="f", text="first", embedding=[1.0]),
            DocumentChunk(id="2", source_file="f", text="second", embedding=[1.0]),
        ]

        assert RagPipeline.build_context(chunks) == "first" + CONTEXT_SEPARATOR + "second"
        assert RagPipeline.build_context([]) == ""

    def test_prompts_file_should_define_answer_generation(self) -> None:
        prompts = load_prompts()

        assert set(prompts["answer_generation"]) == {"system_prompt", "user_prompt_template"}

    def test_missing_api_key_without_client_should_raise(self, services) -> None:
        with pytest.raises(ConfigurationError):
            RagPipeline(embedder=services.embedder, api_key=None)


class TestRagPipelineAnswer:

    @pytest.mark.asyncio
    async def test_empty_store_should_answer_without_external_calls(self, store) -> None:
        # Arrange
        embeddings, completions = FakeEmbeddings(), FakeCompletions()
        services = make_services(make_fake_client(embeddings, completions))

        # Act
        answer = await services.pipeline.answer("What gold purity does Oriana offer?", store)

        # Assert
        assert answer == config.NO_KNOWLEDGE_MESSAGE
        assert embeddings.calls == []
        assert completions.calls == []

    @pytest.mark.asyncio
    async def test_relevant_chunk_should_reach_generation_context(self, store) -> None:
        # Arrange
        document = "Oriana rings come in 18K and 22K gold."
        query = "What gold purity does Oriana offer?"
        completions = FakeCompletions(reply="- 18K and 22K gold")
        services = make_services(make_fake_client(FakeEmbeddings(), completions))
        await services.ingestor.ingest(document.encode("utf-8"), "oriana.txt", "text/plain", store)

        # Act
        answer = await services.pipeline.answer(query, store)

        # Assert
        assert answer == "- 18K and 22K gold"
        [request] = completions.calls
        assert request["model"] == "test-chat"
        assert request["temperature"] == pytest.approx(config.GENERATION_TEMPERATURE)
        assert request["messages"] == services.pipeline.build_messages(query, document)

    @pytest.mark.asyncio
    async def test_low_scoring_chunk_should_leave_context_empty(self, store) -> None:
        # Arrange: best chunk scores 0.30 against the query, below 0.45
        query = "Do you sell watches?"
        embeddings = FakeEmbeddings(vectors={query: [1.0, 0.0]})
        completions = FakeCompletions(reply=config.OUT_OF_SCOPE_MESSAGE)
        services = make_services(make_fake_client(embeddings, completions))
        store.append(DocumentChunk(
            id="c1", source_file="f.txt", text="Rings only.", embedding=[0.30, math.sqrt(1 - 0.09)],
        ))

        # Act
        answer = await services.pipeline.answer(query, store)

        # Assert
        assert embeddings.calls == [query]
        [request] = completions.calls
        assert request["messages"] == services.pipeline.build_messages(query, "")
        assert answer == config.OUT_OF_SCOPE_MESSAGE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["", "   ", None])
    async def test_empty_generation_should_return_apology(self, store, reply) -> None:
        services = make_services(make_fake_client(completions=FakeCompletions(reply=reply)))
        await services.ingestor.ingest("gold", "g.txt", "text/plain", store)

        answer = await services.pipeline.answer("gold?", store)

        assert answer == config.APOLOGY_MESSAGE

    @pytest.mark.asyncio
    async def test_generation_failure_should_raise_generation_error(self, store) -> None:
        completions = FakeCompletions(error=connection_error())
        services = make_services(make_fake_client(completions=completions))
        await services.ingestor.ingest("gold", "g.txt", "text/plain", store)

        with pytest.raises(GenerationError) as exc_info:
            await services.pipeline.answer("gold?", store)

        assert exc_info.value.details["model"] == "test-chat"
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_query_embedding_failure_should_abort_before_generation(self, store) -> None:
        completions = FakeCompletions()
        embeddings = FakeEmbeddings(fail_on={"gold?"})
        services = make_services(make_fake_client(embeddings, completions))
        await services.ingestor.ingest("gold", "g.txt", "text/plain", store)

        with pytest.raises(EmbeddingError):
            await services.pipeline.answer("gold?", store)

        assert completions.calls == []
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_answer_should_be_stripped(self, store) -> None:
        services = make_services(make_fake_client(completions=FakeCompletions(reply="\n- Yes\n")))
        await services.ingestor.ingest("gold", "g.txt", "text/plain", store)

        assert await services.pipeline.answer("gold?", store) == "- Yes"
