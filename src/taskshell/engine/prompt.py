# src/taskshell/engine/prompt.py

"""
Interactive line input.

Actions that need a yes/no answer take a LineReader instead of calling
input() directly, so tests can feed scripted answers.
"""

from typing import Protocol


YES = frozenset({"y", "yes"})
NO = frozenset({"n", "no"})


class LineReader(Protocol):
    def read_line(self, prompt: str) -> str:
        """Show `prompt` and return one line of input (EOFError when exhausted)."""
        ...


class ConsoleReader:
    """LineReader backed by the controlling terminal."""

    def read_line(self, prompt: str) -> str:
        return input(prompt)


def ask_yes_no(reader: LineReader, prompt: str, *, invalid: str = "Invalid response, type y or n") -> bool:
    """
    Ask until the answer is y/yes or n/no (case-insensitive).

    End of input counts as "no".
    """
    while True:
        try:
            answer = reader.read_line(prompt).strip().lower()
        except EOFError:
            return False

        if answer in YES:
            return True
        if answer in NO:
            return False

        print(invalid)


def confirm(reader: LineReader, prompt: str) -> bool:
    """
    Ask once. Only y/yes confirms; anything else (or EOF) declines.
    """
    try:
        answer = reader.read_line(prompt).strip().lower()
    except EOFError:
        return False
    return answer in YES
