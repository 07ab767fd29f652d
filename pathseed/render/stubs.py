"""Render extracted branches as commented pytest stubs."""

from __future__ import annotations

import re

from pathseed.core.analyzer import FileAnalysis
from pathseed.core.models import Conditional, Guarded, Statement, TerminalReturn, TerminalThrow
from pathseed.core.paths import Branch, BranchAccumulator, Outcome

_INDENT = "    "
_EXCEPTION_NAME = re.compile(r"^[A-Za-z_][\w.]*")
_SKIP_LINE = f'{_INDENT}pytest.skip("not implemented")'


def render_module(analysis: FileAnalysis, module_name: str | None = None) -> str:
    """Render a complete pytest module for every function of a file."""
    module = module_name if module_name is not None else analysis.module
    lines = [f'"""Test stubs for {module or analysis.file.name}."""', "", "import pytest", ""]

    imports = _import_names(analysis)
    if _is_importable(module) and imports:
        lines.append(f"from {module} import {', '.join(imports)}")
        lines.append("")

    used: set[str] = set()
    for result in analysis.results:
        for stub in render_function(result, used):
            lines.append("")
            lines.extend(stub.splitlines())
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render_function(result: BranchAccumulator, used: set[str] | None = None) -> list[str]:
    """Render the stubs of one function, success branches first.

    A function without any branch still gets a single stub.
    """
    used = used if used is not None else set()
    base = "test_" + result.function.qualified_name.replace(".", "_")

    if not result.branches:
        return [_stub(result, _unique(base, used), [])]

    stubs = []
    for branch in result.branches:
        name = f"{base}__{'_'.join(s.label.lower() for s in branch)}"
        if branch.outcome is Outcome.FAILURE:
            name += "__failure"
        stubs.append(_stub(result, _unique(name, used), _branch_comments(branch)))
    return stubs


def call_expression(result: BranchAccumulator) -> str:
    """The call a test would make, e.g. ``await Cart(...).add(item)``."""
    function = result.function
    target = function.name
    if function.is_method:
        owner = function.qualified_name.rsplit(".", 1)[0]
        target = f"{owner}(...).{function.name}"
    call = f"{target}({', '.join(function.parameters)})"
    return f"await {call}" if function.is_async else call


def step_comment(step: Statement, outcome: Outcome) -> str | None:
    """The comment describing one step of a branch."""
    failing = outcome is Outcome.FAILURE
    if isinstance(step, Conditional):
        return f"else ({step.test})" if failing else step.test
    if isinstance(step, Guarded):
        if not failing:
            return "try"
        if step.handler_types:
            return f"except {', '.join(step.handler_types)}"
        return "except"
    if isinstance(step, TerminalThrow):
        return f"with pytest.raises({exception_name(step.exc)}):"
    if isinstance(step, TerminalReturn):
        if step.value is None:
            return "assert result is None"
        return f"assert result == {step.value}"
    return None


def exception_name(exc: str | None) -> str:
    """Best-effort exception type of a raise expression."""
    if exc is None:
        return "Exception"
    match = _EXCEPTION_NAME.match(exc)
    return match.group(0) if match else "Exception"


def _branch_comments(branch: Branch) -> list[str]:
    comments = []
    for step in branch:
        comment = step_comment(step, branch.outcome)
        if comment is not None:
            comments.append(comment)
    return comments


def _stub(result: BranchAccumulator, name: str, comments: list[str]) -> str:
    lines = []
    if result.function.is_async:
        lines.append("@pytest.mark.asyncio")
        lines.append(f"async def {name}():")
    else:
        lines.append(f"def {name}():")
    lines.append(f"{_INDENT}# result = {call_expression(result)}")
    lines.extend(f"{_INDENT}# {c}" for c in comments)
    lines.append(_SKIP_LINE)
    return "\n".join(lines)


def _unique(name: str, used: set[str]) -> str:
    candidate = name
    n = 2
    while candidate in used:
        candidate = f"{name}_{n}"
        n += 1
    used.add(candidate)
    return candidate


def _is_importable(module: str) -> bool:
    # Synthetic names such as "<string>" have no import statement.
    return bool(module) and all(part.isidentifier() for part in module.split("."))


def _import_names(analysis: FileAnalysis) -> list[str]:
    names: list[str] = []
    for result in analysis.results:
        top = result.function.qualified_name.split(".")[0]
        if top not in names:
            names.append(top)
    return names
