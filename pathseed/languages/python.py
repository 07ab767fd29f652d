"""Python AST parser for extracting function control-flow trees."""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from pathseed.core.exceptions import ParseError
from pathseed.core.models import (
    Conditional,
    FunctionDescriptor,
    Guarded,
    Other,
    Statement,
    TerminalReturn,
    TerminalThrow,
)
from pathseed.languages.models import ParseResult

logger = logging.getLogger(__name__)

_IMPLICIT_FIRST_PARAMS = ("self", "cls")


class PythonParser:
    """Parser for Python source files using the ast module.

    Only exported functions are returned: module-level functions listed in
    ``__all__`` when the module defines it, otherwise those whose name does not
    start with an underscore.
    """

    def __init__(self, include_private: bool = False, include_methods: bool = False) -> None:
        self.include_private = include_private
        self.include_methods = include_methods

    def supports(self, file: Path) -> bool:
        """Check if this parser supports the given file."""
        return file.suffix == ".py"

    def parse(self, file: Path, module: str | None = None) -> ParseResult:
        """Parse a Python file and extract its function descriptors."""
        try:
            source = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read {file}: {e}") from e

        return self.parse_source(source, file, module=module)

    def parse_source(
        self, source: str, file: Path | str = "<string>", module: str | None = None
    ) -> ParseResult:
        """Parse Python source text."""
        file = Path(file)
        try:
            tree = ast.parse(source, filename=str(file))
        except SyntaxError as e:
            raise ParseError(f"Syntax error in {file}: {e}") from e

        exported = _literal_all(tree)
        functions: list[FunctionDescriptor] = []

        for node in tree.body:
            if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
                if self._is_exported(node.name, exported):
                    functions.append(_function_descriptor(node, node.name))
            elif isinstance(node, ast.ClassDef) and self.include_methods:
                if not self._is_exported(node.name, exported):
                    continue
                for item in node.body:
                    if not isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                        continue
                    if not self.include_private and _is_private(item.name):
                        continue
                    functions.append(
                        _function_descriptor(item, f"{node.name}.{item.name}", is_method=True)
                    )

        for function in functions:
            logger.debug(
                "parsed %s(%s) line %d", function.qualified_name,
                ", ".join(function.parameters), function.line,
            )

        return ParseResult(
            file=file,
            module=module or file.stem,
            functions=functions,
            exported_names=exported,
        )

    def _is_exported(self, name: str, exported: list[str] | None) -> bool:
        if self.include_private:
            return True
        if exported is not None:
            return name in exported
        return not _is_private(name)


def _is_private(name: str) -> bool:
    # Dunder methods such as __call__ are part of the public surface.
    if name.startswith("__") and name.endswith("__"):
        return False
    return name.startswith("_")


def _literal_all(tree: ast.Module) -> list[str] | None:
    """Return the names of a literal module-level ``__all__``, if any."""
    for node in tree.body:
        if isinstance(node, ast.Assign):
            targets = [t.id for t in node.targets if isinstance(t, ast.Name)]
        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            targets = [node.target.id]
        else:
            continue
        if "__all__" not in targets:
            continue
        if isinstance(node.value, (ast.List, ast.Tuple)):
            names = [
                elt.value
                for elt in node.value.elts
                if isinstance(elt, ast.Constant) and isinstance(elt.value, str)
            ]
            return names
    return None


def _function_descriptor(
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    qualified_name: str,
    is_method: bool = False,
) -> FunctionDescriptor:
    return FunctionDescriptor(
        name=node.name,
        qualified_name=qualified_name,
        parameters=_parameters(node.args, drop_implicit=is_method),
        body=_convert_body(node.body),
        line=node.lineno,
        is_async=isinstance(node, ast.AsyncFunctionDef),
        is_method=is_method,
    )


def _parameters(args: ast.arguments, drop_implicit: bool = False) -> tuple[str, ...]:
    """Ordered parameter names; variadic ones keep their star prefix."""
    names = [a.arg for a in args.posonlyargs + args.args]
    if drop_implicit and names and names[0] in _IMPLICIT_FIRST_PARAMS:
        names = names[1:]
    if args.vararg:
        names.append(f"*{args.vararg.arg}")
    names.extend(a.arg for a in args.kwonlyargs)
    if args.kwarg:
        names.append(f"**{args.kwarg.arg}")
    return tuple(names)


def _convert_body(body: list[ast.stmt]) -> tuple[Statement, ...]:
    return tuple(_convert_statement(stmt) for stmt in body)


def _convert_statement(node: ast.stmt) -> Statement:
    """Map an ast statement onto the closed statement model."""
    if isinstance(node, ast.If):
        return Conditional(
            test=_unparse(node.test),
            body=_convert_body(node.body),
            orelse=_convert_body(node.orelse),
            line=node.lineno,
        )
    if isinstance(node, (ast.Try, ast.TryStar)):
        handlers: list[Statement] = []
        handler_types: list[str] = []
        for handler in node.handlers:
            handlers.extend(_convert_body(handler.body))
            if handler.type is not None:
                handler_types.append(_unparse(handler.type))
        return Guarded(
            body=_convert_body(node.body) + _convert_body(node.orelse),
            handlers=tuple(handlers),
            handler_types=tuple(handler_types),
            line=node.lineno,
            label=type(node).__name__,
        )
    if isinstance(node, ast.Return):
        value = _unparse(node.value) if node.value is not None else None
        return TerminalReturn(value=value, line=node.lineno)
    if isinstance(node, ast.Raise):
        exc = _unparse(node.exc) if node.exc is not None else None
        return TerminalThrow(exc=exc, line=node.lineno)
    return Other(label=type(node).__name__, line=node.lineno)


def _unparse(node: ast.expr) -> str:
    """Convert an AST expression back to a readable string."""
    try:
        return ast.unparse(node)
    except Exception:
        return "<expression>"
