"""Data models for path extraction."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pathseed.core.models import Statement, TerminalReturn, TerminalThrow, is_terminal


class Outcome(Enum):
    """Whether a branch was discovered on a success or a failure path."""

    SUCCESS = "success"
    FAILURE = "failure"


class TraversalContext(Enum):
    """How the walker reached the node it is currently visiting."""

    ROOT = "root"
    IF = "if"
    ELSE = "else"
    TRY = "try"
    CATCH = "catch"


@dataclass(frozen=True)
class Branch:
    """One linear path from function entry to a terminal statement."""

    steps: tuple[Statement, ...]
    outcome: Outcome

    @property
    def is_complete(self) -> bool:
        return bool(self.steps) and is_terminal(self.steps[-1])

    @property
    def terminal(self) -> TerminalReturn | TerminalThrow | None:
        """The statement ending this branch, or None if it is still open."""
        last = self.steps[-1] if self.steps else None
        if isinstance(last, (TerminalReturn, TerminalThrow)):
            return last
        return None

    @property
    def label(self) -> str:
        return "->".join(step.label for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.steps)

    def __repr__(self) -> str:
        return f"Branch({self.outcome.value}: {self.label})"
