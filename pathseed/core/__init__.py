"""
Core module: statement model, exceptions, and path extraction.

This module provides the foundational types and the branch walker:

Models (models.py):
    - Conditional, Guarded, TerminalReturn, TerminalThrow, Other: the
      closed set of statements a function body is made of
    - FunctionDescriptor: A function's name, parameters and body
    - StatementKind: Enum naming the statement kinds

Exceptions (exceptions.py):
    - PathseedError: Base exception for all pathseed errors
    - ParseError: Source file could not be parsed
    - FunctionNotFoundError: Requested function doesn't exist

Paths (paths/):
    - walk / extract_branches: DFS over conditionals and try blocks
    - BranchAccumulator: Success and failure branches of one function
"""

from pathseed.core.exceptions import (
    FunctionNotFoundError,
    ParseError,
    PathseedError,
)
from pathseed.core.models import (
    AnalysisStats,
    Conditional,
    FunctionDescriptor,
    Guarded,
    Other,
    Statement,
    StatementKind,
    TerminalReturn,
    TerminalThrow,
)
from pathseed.core.paths import Branch, BranchAccumulator, Outcome, extract_branches, walk

__all__ = [
    # Models
    "AnalysisStats",
    "Conditional",
    "FunctionDescriptor",
    "Guarded",
    "Other",
    "Statement",
    "StatementKind",
    "TerminalReturn",
    "TerminalThrow",
    # Exceptions
    "PathseedError",
    "FunctionNotFoundError",
    "ParseError",
    # Paths
    "Branch",
    "BranchAccumulator",
    "Outcome",
    "extract_branches",
    "walk",
]
