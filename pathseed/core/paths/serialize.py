"""JSON-serializable views of functions and branches."""

from __future__ import annotations

from typing import Any

from pathseed.core.models import (
    Conditional,
    FunctionDescriptor,
    Guarded,
    Statement,
    TerminalReturn,
    TerminalThrow,
)
from pathseed.core.paths.accumulator import BranchAccumulator
from pathseed.core.paths.models import Branch


def statement_to_dict(statement: Statement) -> dict[str, Any]:
    """Convert a Statement to a JSON-serializable dict."""
    result: dict[str, Any] = {
        "kind": statement.kind.value,
        "label": statement.label,
        "line": statement.line,
    }
    if isinstance(statement, Conditional):
        result["test"] = statement.test
    elif isinstance(statement, Guarded):
        result["handler_types"] = list(statement.handler_types)
    elif isinstance(statement, TerminalReturn):
        result["value"] = statement.value
    elif isinstance(statement, TerminalThrow):
        result["exc"] = statement.exc
    return result


def branch_to_dict(branch: Branch) -> dict[str, Any]:
    """Convert a Branch to a JSON-serializable dict."""
    return {
        "outcome": branch.outcome.value,
        "label": branch.label,
        "complete": branch.is_complete,
        "steps": [statement_to_dict(s) for s in branch],
    }


def descriptor_to_dict(function: FunctionDescriptor) -> dict[str, Any]:
    """Convert a FunctionDescriptor to a JSON-serializable dict (without body)."""
    return {
        "name": function.name,
        "qualified_name": function.qualified_name,
        "parameters": list(function.parameters),
        "line": function.line,
        "is_async": function.is_async,
        "is_method": function.is_method,
    }


def function_to_dict(result: BranchAccumulator) -> dict[str, Any]:
    """Convert a function's accumulator to a JSON-serializable dict."""
    return {
        **descriptor_to_dict(result.function),
        "branches": [branch_to_dict(b) for b in result.branches],
    }
