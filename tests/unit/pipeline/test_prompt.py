"""Tests for prompt assembly."""

from ragcore.entities.conversation import ConversationTurn
from ragcore.pipeline import NO_CONTEXT_MESSAGE, build_context, build_messages, build_system_prompt
from tests.helpers import make_result


def test_build_context_labels_sources():
    context = build_context([
        make_result("a", "Alpha text", 0.9, filename="a.md"),
        make_result("b", "Beta text", 0.8, filename="b.pdf"),
    ])

    assert context == "[Source 1: a.md]\nAlpha text\n\n---\n\n[Source 2: b.pdf]\nBeta text"


def test_build_context_empty():
    assert build_context([]) == NO_CONTEXT_MESSAGE


def test_system_prompt_embeds_context_and_organization():
    prompt = build_system_prompt("CONTEXT BODY", organization="Acme Institute")

    assert prompt.startswith("You are a helpful AI assistant for Acme Institute.")
    assert prompt.endswith("Context from knowledge base:\nCONTEXT BODY")


def test_build_messages_order():
    history = [ConversationTurn(query="q1", response="a1"), ConversationTurn(query="q2", response="a2")]

    messages = build_messages("q3", "ctx", history)

    assert [m["role"] for m in messages] == ["system", "user", "assistant", "user", "assistant", "user"]
    assert [m["content"] for m in messages[1:]] == ["q1", "a1", "q2", "a2", "q3"]


def test_build_messages_without_history():
    messages = build_messages("hello", "ctx")
    assert len(messages) == 2
    assert messages[-1] == {"role": "user", "content": "hello"}
