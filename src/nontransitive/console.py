from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol


class LineIO(Protocol):
    def read_line(self, prompt: str) -> str: ...

    def write_line(self, text: str = "") -> None: ...


class ConsoleIO:
    """Terminal I/O over ``input()`` and ``print()``."""

    def read_line(self, prompt: str) -> str:
        return input(prompt)

    def write_line(self, text: str = "") -> None:
        print(text)


@dataclass
class ScriptedIO:
    # Replays canned input lines and records everything written, prompts included.
    lines: list[str] = field(default_factory=list)
    output: list[str] = field(default_factory=list)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "ScriptedIO":
        return cls(lines=list(lines))

    def read_line(self, prompt: str) -> str:
        self.output.append(prompt)
        if not self.lines:
            raise EOFError("no more scripted input")
        return self.lines.pop(0)

    def write_line(self, text: str = "") -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)
