"""Tests for interactive input helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tunnelprep.exceptions import InputError
from tunnelprep.prompts import fixed_answers, prompt_string, require_value


class TestPromptString:
    def test_strips_answer(self):
        with patch("builtins.input", return_value="  prod-tunnel  ") as mock_input:
            assert prompt_string("Enter a name for your tunnel") == "prod-tunnel"
        mock_input.assert_called_once_with("Enter a name for your tunnel: ")

    def test_eof_returns_empty(self):
        with patch("builtins.input", side_effect=EOFError):
            assert prompt_string("Q") == ""

    def test_keyboard_interrupt_exits(self):
        with (
            patch("builtins.input", side_effect=KeyboardInterrupt),
            pytest.raises(SystemExit) as exc_info,
        ):
            prompt_string("Q")
        assert exc_info.value.code == 130


class TestFixedAnswers:
    def test_in_order_then_empty(self):
        ask = fixed_answers("a", "b")
        assert [ask("q1"), ask("q2"), ask("q3")] == ["a", "b", ""]


class TestRequireValue:
    def test_returns_value(self):
        assert require_value(fixed_answers(" example.com "), "Domain?", "Domain") == (
            "example.com"
        )

    @pytest.mark.parametrize("answer", ["", "   "])
    def test_empty_raises(self, answer):
        with pytest.raises(InputError, match="Domain cannot be empty"):
            require_value(fixed_answers(answer), "Domain?", "Domain")
