# seqdb/prompts.py
from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Protocol, TextIO

__all__ = ["Prompter", "ConsolePrompter", "ScriptedPrompter", "DefaultsPrompter"]


class Prompter(Protocol):
    def ask(self, prompt: str) -> str: ...


class ConsolePrompter:
    """Read one line of operator input per prompt (EOFError at end of input)."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def ask(self, prompt: str) -> str:
        stdin = self.stdin or sys.stdin
        stdout = self.stdout or sys.stdout
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError("no more input")
        return line.strip()


class ScriptedPrompter:
    """
    Answer prompts from a fixed list of responses, in order.  The prompts seen
    are kept in `prompts` for inspection.  Running out of responses raises
    EOFError, like a closed stdin.
    """

    def __init__(self, responses: Iterable[str]):
        self.responses: List[str] = list(responses)
        self.prompts: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise EOFError(f"no scripted response for prompt {prompt!r}")
        return self.responses.pop(0).strip()


class DefaultsPrompter:
    """Non-interactive use: every prompt is answered with its default."""

    def __init__(self):
        self.prompts: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return ""
