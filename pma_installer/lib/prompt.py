from __future__ import annotations

from typing import Callable

Confirm = Callable[[str], bool]

_YES = {"y", "yes"}


def prompt_yes_no(question: str) -> bool:
    """Ask a y/N question on the terminal. Empty input and EOF mean no."""

    try:
        answer = input(f"* {question} ")
    except EOFError:
        print()
        return False
    return answer.strip().lower() in _YES
