"""Path walker: depth-first extraction of success and failure branches."""

from __future__ import annotations

import logging

from pathseed.core.models import (
    PATH_SHAPING_TYPES,
    Conditional,
    FunctionDescriptor,
    Guarded,
    Statement,
    TerminalReturn,
    TerminalThrow,
)
from pathseed.core.paths.accumulator import BranchAccumulator, BranchCollection
from pathseed.core.paths.models import TraversalContext

logger = logging.getLogger(__name__)

WalkNode = FunctionDescriptor | Conditional | Guarded


def extract_branches(function: FunctionDescriptor) -> BranchAccumulator:
    """Walk a function body and return its completed accumulator."""
    return walk(function)


def walk(
    node: WalkNode,
    accumulator: BranchAccumulator | None = None,
    context: TraversalContext = TraversalContext.ROOT,
    depth: int = 0,
) -> BranchAccumulator:
    """Extend ``accumulator`` with the branches through ``node``.

    DFS, then-before-else and try-before-catch. Every Conditional or Guarded
    node visited is recorded on the open success branch, and on the open
    failure branch when it has a failure path of its own. Terminals close the
    open branch of the collection they were found in.

    Args:
        node: Function root, conditional or guarded block
        accumulator: Accumulator of the enclosing function; created for
            a function root when omitted
        context: How ``node`` was reached (if/else/try/catch)
        depth: Nesting depth of ``node`` below the function root

    Returns:
        The same accumulator, extended in place
    """
    if accumulator is None:
        if not isinstance(node, FunctionDescriptor):
            raise TypeError("walk() needs an accumulator unless node is a function")
        accumulator = BranchAccumulator(node)

    success, fail = _split(node)
    success = _path_shaping(success)
    fail = _path_shaping(fail)

    logger.debug(
        "walk %s %s depth=%d success=%d fail=%d",
        context.value,
        _describe(node),
        depth,
        len(success),
        len(fail),
    )

    if not isinstance(node, FunctionDescriptor):
        accumulator.success.extend(node)
        if fail:
            accumulator.failure.extend(node)

    _walk_list(success, accumulator, accumulator.success, depth, failing=False)
    _walk_list(fail, accumulator, accumulator.failure, depth, failing=True)

    return accumulator


def _walk_list(
    statements: list[Statement],
    accumulator: BranchAccumulator,
    collection: BranchCollection,
    depth: int,
    failing: bool,
) -> None:
    for stmt in statements:
        if isinstance(stmt, Guarded):
            ctx = TraversalContext.CATCH if failing else TraversalContext.TRY
            walk(stmt, accumulator, ctx, depth + 1)
        elif isinstance(stmt, Conditional):
            ctx = TraversalContext.ELSE if failing else TraversalContext.IF
            walk(stmt, accumulator, ctx, depth + 1)
        elif isinstance(stmt, (TerminalReturn, TerminalThrow)):
            collection.extend(stmt)
            collection.close()


def _split(node: WalkNode) -> tuple[tuple[Statement, ...], tuple[Statement, ...]]:
    """Return the raw (success, failure) statement lists of a node."""
    if isinstance(node, Conditional):
        return node.body, node.orelse
    if isinstance(node, Guarded):
        return node.body, node.handlers
    return node.body, ()


def _path_shaping(statements: tuple[Statement, ...]) -> list[Statement]:
    """Drop statements that do not affect branch shape."""
    return [s for s in statements if isinstance(s, PATH_SHAPING_TYPES)]


def _describe(node: WalkNode) -> str:
    if isinstance(node, FunctionDescriptor):
        return node.qualified_name
    if isinstance(node, Conditional):
        return f"If({node.test}) line {node.line}"
    return f"{node.label} line {node.line}"
