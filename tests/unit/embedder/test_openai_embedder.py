"""Tests for the OpenAI-compatible embedder with a mocked HTTP client."""

import httpx
import pytest

from ragcore.embedder import EmbedderFactory, HashEmbedder, OpenAIEmbedder
from ragcore.errors import (
    AuthenticationError,
    ConfigError,
    ProviderError,
    ProviderTimeoutError,
    ServiceUnavailableError,
    TransientProviderError,
)


def embedding_response(vectors):
    return httpx.Response(
        200,
        json={
            "data": [{"index": i, "embedding": v} for i, v in enumerate(vectors)],
            "usage": {"total_tokens": 4},
        },
    )


@pytest.fixture
def no_sleep(mocker):
    return mocker.patch("ragcore.utils.retry.time.sleep")


@pytest.fixture
def embedder():
    embedder = OpenAIEmbedder(api_key="sk-test", base_url="https://api.example.com/v1/", retry_base_delay=0.01)
    yield embedder
    embedder.close()


class TestOpenAIEmbedder:

    def test_embed_parses_vectors_in_index_order(self, embedder, mocker):
        response = httpx.Response(200, json={"data": [
            {"index": 1, "embedding": [0.0, 1.0]},
            {"index": 0, "embedding": [1.0, 0.0]},
        ]})
        post = mocker.patch.object(embedder.client, "post", return_value=response)

        vectors = embedder.embed(["first", "second"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]
        assert embedder.dimension == 2
        url = post.call_args.args[0]
        assert url == "https://api.example.com/v1/embeddings"
        assert post.call_args.kwargs["json"] == {"input": ["first", "second"], "model": "text-embedding-ada-002"}
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer sk-test"

    def test_embed_empty_list_makes_no_call(self, embedder, mocker):
        post = mocker.patch.object(embedder.client, "post")
        assert embedder.embed([]) == []
        post.assert_not_called()

    def test_batches_large_inputs(self, mocker):
        embedder = OpenAIEmbedder(api_key="sk-test", batch_size=2)
        post = mocker.patch.object(
            embedder.client,
            "post",
            side_effect=[embedding_response([[1.0], [2.0]]), embedding_response([[3.0]])],
        )

        assert embedder.embed(["a", "b", "c"]) == [[1.0], [2.0], [3.0]]
        assert post.call_count == 2

    def test_embed_query(self, embedder, mocker):
        mocker.patch.object(embedder.client, "post", return_value=embedding_response([[0.5, 0.5]]))
        assert embedder.embed_query("hello") == [0.5, 0.5]

    def test_authentication_error_not_retried(self, embedder, mocker, no_sleep):
        post = mocker.patch.object(
            embedder.client, "post", return_value=httpx.Response(401, text="invalid api key")
        )

        with pytest.raises(AuthenticationError):
            embedder.embed(["text"])

        assert post.call_count == 1
        no_sleep.assert_not_called()

    def test_service_unavailable_retried(self, embedder, mocker, no_sleep):
        post = mocker.patch.object(
            embedder.client,
            "post",
            side_effect=[httpx.Response(503, text="overloaded"), embedding_response([[1.0, 0.0]])],
        )

        assert embedder.embed(["text"]) == [[1.0, 0.0]]
        assert post.call_count == 2
        no_sleep.assert_called_once()

    def test_gives_up_after_max_retries(self, embedder, mocker, no_sleep):
        post = mocker.patch.object(embedder.client, "post", return_value=httpx.Response(503))

        with pytest.raises(ServiceUnavailableError):
            embedder.embed(["text"])

        assert post.call_count == 3

    def test_timeout(self, embedder, mocker, no_sleep):
        mocker.patch.object(embedder.client, "post", side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(ProviderTimeoutError) as exc_info:
            embedder.embed(["text"])

        assert exc_info.value.timeout == 30.0

    def test_connection_error(self, embedder, mocker, no_sleep):
        mocker.patch.object(embedder.client, "post", side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(TransientProviderError):
            embedder.embed(["text"])

    def test_count_mismatch(self, embedder, mocker):
        mocker.patch.object(embedder.client, "post", return_value=embedding_response([[1.0]]))

        with pytest.raises(ProviderError, match="Expected 2 embeddings"):
            embedder.embed(["a", "b"])

    def test_malformed_response(self, embedder, mocker):
        mocker.patch.object(
            embedder.client, "post", return_value=httpx.Response(200, json={"data": [{"index": 0}]})
        )

        with pytest.raises(ProviderError, match="Malformed"):
            embedder.embed(["a"])


class TestEmbedderFactory:

    def test_create_hash(self):
        embedder = EmbedderFactory.create("hash", dimension=16)
        assert isinstance(embedder, HashEmbedder)
        assert embedder.dimension == 16

    def test_create_openai(self):
        embedder = EmbedderFactory.create("openai", api_key="sk-test", model="text-embedding-3-small")
        assert isinstance(embedder, OpenAIEmbedder)
        assert embedder.model == "text-embedding-3-small"

    def test_unknown_type(self):
        with pytest.raises(ConfigError, match="Unknown embedder type"):
            EmbedderFactory.create("word2vec")

    def test_register_rejects_non_embedder(self):
        with pytest.raises(TypeError):
            EmbedderFactory.register("bad", object)
