"""Branch collections and the per-function accumulator."""

from __future__ import annotations

from pathseed.core.models import FunctionDescriptor, Statement
from pathseed.core.paths.models import Branch, Outcome


class BranchCollection:
    """Ordered branches of one outcome, with at most one open branch.

    The open branch is always the last one. ``extend`` appends to it (opening
    one first if the collection is empty) and ``close`` transitions to a fresh
    empty open branch.
    """

    __slots__ = ("_outcome", "_branches")

    def __init__(self, outcome: Outcome) -> None:
        self._outcome = outcome
        self._branches: list[list[Statement]] = []

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def current(self) -> Branch | None:
        """The open branch, or None before anything was recorded."""
        if not self._branches:
            return None
        return Branch(steps=tuple(self._branches[-1]), outcome=self._outcome)

    def extend(self, statement: Statement) -> None:
        """Append a statement to the open branch. O(1)."""
        if not self._branches:
            self._branches.append([])
        self._branches[-1].append(statement)

    def close(self) -> None:
        """Close the open branch and open a new empty one. O(1)."""
        self._branches.append([])

    @property
    def branches(self) -> list[Branch]:
        """All branches in discovery order, including the open one."""
        return [Branch(steps=tuple(steps), outcome=self._outcome) for steps in self._branches]

    def __len__(self) -> int:
        return len(self._branches)

    def __repr__(self) -> str:
        return f"BranchCollection({self._outcome.value}, branches={len(self)})"


class BranchAccumulator:
    """Success and failure branches discovered in a single function.

    Owned by one top-level walk and passed by reference to every recursive
    call of that walk.
    """

    __slots__ = ("_function", "_success", "_failure")

    def __init__(self, function: FunctionDescriptor) -> None:
        self._function = function
        self._success = BranchCollection(Outcome.SUCCESS)
        self._failure = BranchCollection(Outcome.FAILURE)

    @property
    def function(self) -> FunctionDescriptor:
        return self._function

    @property
    def name(self) -> str:
        return self._function.name

    @property
    def parameters(self) -> tuple[str, ...]:
        return self._function.parameters

    @property
    def success(self) -> BranchCollection:
        return self._success

    @property
    def failure(self) -> BranchCollection:
        return self._failure

    @property
    def success_branches(self) -> list[Branch]:
        return self._success.branches

    @property
    def fail_branches(self) -> list[Branch]:
        return self._failure.branches

    @property
    def branches(self) -> list[Branch]:
        """Success then failure branches, with empty branches removed."""
        return [b for b in self.success_branches + self.fail_branches if len(b) > 0]

    def __repr__(self) -> str:
        return (
            f"BranchAccumulator({self.name}, success={len(self._success)}, "
            f"failure={len(self._failure)})"
        )
