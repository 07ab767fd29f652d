"""Data models for Pathseed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StatementKind(Enum):
    """The closed set of statement kinds the path walker distinguishes."""

    CONDITIONAL = "conditional"
    GUARDED = "guarded"
    RETURN = "return"
    THROW = "throw"
    OTHER = "other"


@dataclass(frozen=True)
class Conditional:
    """An if/else statement. An ``elif`` arrives as a one-element ``orelse``."""

    test: str
    body: tuple[Statement, ...]
    orelse: tuple[Statement, ...] = ()
    line: int = 0
    label: str = "If"

    @property
    def kind(self) -> StatementKind:
        return StatementKind.CONDITIONAL


@dataclass(frozen=True)
class Guarded:
    """A try/except statement.

    ``body`` holds the statements that run when nothing is raised (the try
    block followed by the try-else block). ``handlers`` holds the bodies of all
    except clauses, concatenated in source order.
    """

    body: tuple[Statement, ...]
    handlers: tuple[Statement, ...] = ()
    handler_types: tuple[str, ...] = ()
    line: int = 0
    label: str = "Try"

    @property
    def kind(self) -> StatementKind:
        return StatementKind.GUARDED


@dataclass(frozen=True)
class TerminalReturn:
    """A return statement; ``value`` is None for a bare ``return``."""

    value: str | None = None
    line: int = 0
    label: str = "Return"

    @property
    def kind(self) -> StatementKind:
        return StatementKind.RETURN


@dataclass(frozen=True)
class TerminalThrow:
    """A raise statement; ``exc`` is None for a bare re-raise."""

    exc: str | None = None
    line: int = 0
    label: str = "Raise"

    @property
    def kind(self) -> StatementKind:
        return StatementKind.THROW


@dataclass(frozen=True)
class Other:
    """Any statement that does not shape control flow."""

    label: str
    line: int = 0

    @property
    def kind(self) -> StatementKind:
        return StatementKind.OTHER


Statement = Conditional | Guarded | TerminalReturn | TerminalThrow | Other

TERMINAL_TYPES = (TerminalReturn, TerminalThrow)
PATH_SHAPING_TYPES = (Conditional, Guarded, TerminalReturn, TerminalThrow)


def is_terminal(statement: Statement) -> bool:
    """Check whether a statement ends a path."""
    return isinstance(statement, TERMINAL_TYPES)


@dataclass(frozen=True)
class FunctionDescriptor:
    """A function ready to be walked: its name, parameters and body."""

    name: str
    qualified_name: str
    parameters: tuple[str, ...]
    body: tuple[Statement, ...]
    line: int = 0
    is_async: bool = False
    is_method: bool = False


class AnalysisStats:
    """Statistics from an analysis run."""

    def __init__(self) -> None:
        self.files: int = 0
        self.functions: int = 0
        self.branches: int = 0
        self.success: int = 0
        self.failure: int = 0
        self.skipped: int = 0
        self.errors: list[str] = []

    def __repr__(self) -> str:
        return (
            f"AnalysisStats(files={self.files}, functions={self.functions}, "
            f"branches={self.branches}, success={self.success}, "
            f"failure={self.failure}, skipped={self.skipped}, errors={len(self.errors)})"
        )
