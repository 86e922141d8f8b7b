"""Tests for the framework-independent request handlers."""

import pytest

from ragcore.api import APOLOGY, handle_chat_request, handle_clear_history, handle_stats
from ragcore.pipeline import RAGPipeline
from tests.helpers import ScriptedIndex, make_result


@pytest.fixture
def pipeline(hash_embedder, stub_llm, corpus_dir):
    index = ScriptedIndex(hash_embedder, results=[make_result("c0", "Fees are due in March.", 0.9)])
    return RAGPipeline(hash_embedder, stub_llm, index, corpus_dir)


class TestHandleChatRequest:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, "", "  "])
    async def test_missing_message(self, pipeline, message):
        reply = await handle_chat_request(pipeline, message)

        assert reply.status_code == 400
        assert reply.body == {"error": "Message is required"}

    @pytest.mark.asyncio
    async def test_success(self, pipeline):
        reply = await handle_chat_request(pipeline, "When are fees due?", session_id="s1")

        assert reply.status_code == 200
        assert reply.body["response"] == "Grounded answer."
        assert reply.body["sources"][0]["filename"] == "doc.md"
        assert reply.body["metadata"]["session_id"] == "s1"

    @pytest.mark.asyncio
    async def test_not_initialized(self, hash_embedder, stub_llm, corpus_dir):
        pipeline = RAGPipeline(hash_embedder, stub_llm, ScriptedIndex(hash_embedder), corpus_dir, lazy_initialize=False)

        reply = await handle_chat_request(pipeline, "hello")

        assert reply.status_code == 503
        assert reply.body["fallback_response"] == APOLOGY

    @pytest.mark.asyncio
    async def test_unexpected_error(self, pipeline, mocker):
        mocker.patch.object(pipeline, "process_query", side_effect=RuntimeError("boom"))

        reply = await handle_chat_request(pipeline, "hello")

        assert reply.status_code == 500
        assert reply.body == {"error": "Failed to process message", "fallback_response": APOLOGY}


class TestOtherHandlers:

    @pytest.mark.asyncio
    async def test_clear_history(self, pipeline):
        await handle_chat_request(pipeline, "When are fees due?", session_id="s1")

        reply = handle_clear_history(pipeline, "s1")

        assert reply.status_code == 200
        assert pipeline.memory.get_history("s1") == []

    def test_clear_history_requires_session(self, pipeline):
        assert handle_clear_history(pipeline, None).status_code == 400

    def test_stats(self, pipeline):
        reply = handle_stats(pipeline)

        assert reply.status_code == 200
        assert reply.body["stats"]["state"] == "uninitialized"

    def test_stats_failure(self, pipeline, mocker):
        mocker.patch.object(pipeline, "get_stats", side_effect=RuntimeError("boom"))
        assert handle_stats(pipeline).status_code == 500
