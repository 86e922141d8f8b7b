"""Tests for per-session conversation memory."""

import pytest

from ragcore.memory import MAX_HISTORY, SessionMemory


class TestSessionMemory:

    def test_unknown_session_is_empty(self):
        assert SessionMemory().get_history("nobody") == []

    def test_append_keeps_order(self):
        memory = SessionMemory()
        memory.append("s1", "Hi", "Hello")
        memory.append("s1", "Fees?", "See the fees page.")

        history = memory.get_history("s1")

        assert [turn.query for turn in history] == ["Hi", "Fees?"]
        assert history[1].response == "See the fees page."

    def test_history_capped_at_ten_turns(self):
        memory = SessionMemory()
        for i in range(12):
            memory.append("s1", f"q{i}", f"a{i}")

        history = memory.get_history("s1")

        assert MAX_HISTORY == 10
        assert len(history) == 10
        assert history[0].query == "q2"
        assert history[-1].query == "q11"

    def test_sessions_are_isolated(self):
        memory = SessionMemory()
        memory.append("s1", "q", "a")
        memory.append("s2", "q", "a")
        memory.append("s2", "q", "a")

        assert len(memory.get_history("s1")) == 1
        assert memory.active_sessions() == 2
        assert memory.total_turns() == 3

    def test_returned_history_is_a_copy(self):
        memory = SessionMemory()
        memory.append("s1", "q", "a")

        memory.get_history("s1").clear()

        assert len(memory.get_history("s1")) == 1

    def test_clear(self):
        memory = SessionMemory()
        memory.append("s1", "q", "a")

        assert memory.clear("s1") is True
        assert memory.get_history("s1") == []
        assert memory.clear("s1") is False

    def test_invalid_max_history(self):
        with pytest.raises(ValueError):
            SessionMemory(max_history=0)
