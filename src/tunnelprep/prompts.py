"""Interactive input.

The wizard asks questions through an ``InputProvider``: any callable that
takes the question text and returns the answer. ``prompt_string`` reads
from the terminal; ``fixed_answers`` replays canned answers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from tunnelprep.exceptions import InputError

InputProvider = Callable[[str], str]


def prompt_string(question: str) -> str:
    """Ask *question* on the terminal and return the stripped answer."""
    try:
        return input(f"{question}: ").strip()
    except EOFError:
        return ""
    except KeyboardInterrupt:
        raise SystemExit(130) from None


def fixed_answers(*answers: str) -> InputProvider:
    """Return a provider that answers with *answers* in order, then ``""``."""
    remaining: Iterator[str] = iter(answers)

    def _ask(question: str) -> str:  # noqa: ARG001
        return next(remaining, "")

    return _ask


def require_value(ask: InputProvider, question: str, label: str) -> str:
    """Ask *question* and raise ``InputError`` if the answer is empty."""
    answer = (ask(question) or "").strip()
    if not answer:
        raise InputError(f"{label} cannot be empty.")
    return answer
