"""Unit tests for the path walker."""

from textwrap import dedent

import pytest

from pathseed.core.analyzer import Analyzer
from pathseed.core.models import (
    Conditional,
    FunctionDescriptor,
    Guarded,
    Other,
    TerminalReturn,
    TerminalThrow,
)
from pathseed.core.paths import BranchAccumulator, Outcome, extract_branches, walk


def make_function(*body, name: str = "f") -> FunctionDescriptor:
    """Create a test function descriptor."""
    return FunctionDescriptor(
        name=name,
        qualified_name=name,
        parameters=("x",),
        body=tuple(body),
    )


def analyze(source: str) -> BranchAccumulator:
    """Extract the branches of the first function in a source snippet."""
    analysis = Analyzer(include_private=True).analyze_source(dedent(source))
    return analysis.results[0]


def labels(result: BranchAccumulator, outcome: Outcome) -> list[str]:
    return [b.label for b in result.branches if b.outcome is outcome]


class TestNoControlFlow:
    """Functions without any path-shaping statement."""

    def test_plain_statements_have_no_branches(self) -> None:
        """Test that assignments and calls produce no branches."""
        result = analyze(
            """
            def f(x):
                y = x + 1
                print(y)
            """
        )
        assert result.branches == []

    def test_loops_are_invisible(self) -> None:
        """Test that loops and with blocks do not shape paths."""
        result = analyze(
            """
            def f(items):
                for item in items:
                    print(item)
                with open("x") as fh:
                    fh.read()
            """
        )
        assert result.branches == []

    def test_empty_body(self) -> None:
        """Test a function whose body is only a docstring."""
        fn = make_function(Other(label="Expr"))
        assert extract_branches(fn).branches == []


class TestConditionals:
    """Tests for if/else handling."""

    def test_if_else_both_return(self) -> None:
        """Test that then and else each produce one branch."""
        result = analyze(
            """
            def f(x):
                if x:
                    return 1
                else:
                    return 2
            """
        )
        success = [b for b in result.success_branches if len(b) > 0]
        failure = [b for b in result.fail_branches if len(b) > 0]

        assert len(success) == 1
        assert len(failure) == 1
        assert success[0].label == "If->Return"
        assert failure[0].label == "If->Return"

        assert success[0].steps[0].test == "x"
        assert failure[0].steps[0].test == "x"
        assert success[0].terminal.value == "1"
        assert failure[0].terminal.value == "2"

    def test_if_then_trailing_return(self) -> None:
        """Test that a return after the if is its own success branch."""
        result = analyze(
            """
            def f(x):
                if x:
                    return 1
                return 2
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["If->Return", "Return"]
        assert [b.terminal.value for b in result.branches] == ["1", "2"]
        assert result.fail_branches == []

    def test_if_without_else_opens_no_failure_branch(self) -> None:
        """Test that a missing else never creates a failure branch."""
        result = analyze(
            """
            def f(x):
                if x:
                    raise ValueError("x")
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["If->Raise"]
        assert labels(result, Outcome.FAILURE) == []
        assert len(result.failure) == 0

    def test_nested_guards_accumulate(self) -> None:
        """Test that nested conditionals extend the same open branch."""
        result = analyze(
            """
            def f(a, b):
                if a:
                    if b:
                        return 1
                    return 2
                else:
                    return 3
                return 4
            """
        )
        success = [b for b in result.branches if b.outcome is Outcome.SUCCESS]
        assert [b.label for b in success] == ["If->If->Return", "Return", "Return"]
        assert [s.test for s in success[0].steps[:2]] == ["a", "b"]
        assert [b.terminal.value for b in success] == ["1", "2", "4"]

        failure = [b for b in result.branches if b.outcome is Outcome.FAILURE]
        assert [b.label for b in failure] == ["If->Return"]
        assert failure[0].terminal.value == "3"

    def test_elif_chain(self) -> None:
        """Test that an elif is walked as the else path of its parent."""
        result = analyze(
            """
            def sign(x):
                if x > 0:
                    return "pos"
                elif x < 0:
                    return "neg"
                else:
                    return "zero"
            """
        )
        success = [b for b in result.branches if b.outcome is Outcome.SUCCESS]
        failure = [b for b in result.branches if b.outcome is Outcome.FAILURE]

        assert [b.terminal.value for b in success] == ["'pos'", "'neg'"]
        assert success[1].steps[0].test == "x < 0"
        assert [b.label for b in failure] == ["If->If->Return"]
        assert failure[0].terminal.value == "'zero'"

    def test_sibling_terminals_are_not_merged(self) -> None:
        """Test that each terminal closes its branch."""
        result = analyze(
            """
            def f(x):
                if x:
                    return 1
                    return 2
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["If->Return", "Return"]

    def test_fallthrough_continues_open_branch(self) -> None:
        """Test that a guard without terminal stays on the open branch."""
        result = analyze(
            """
            def f(x):
                if x:
                    print(x)
                return x
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["If->Return"]

    def test_trailing_open_branch(self) -> None:
        """Test that a guard never followed by a terminal stays open."""
        result = analyze(
            """
            def f(x):
                if x:
                    print(x)
            """
        )
        assert len(result.branches) == 1
        assert not result.branches[0].is_complete
        assert result.branches[0].terminal is None


class TestGuardedBlocks:
    """Tests for try/except handling."""

    def test_try_with_nested_conditional(self) -> None:
        """Test that labels accumulate outward to inward."""
        result = analyze(
            """
            def f(c, v):
                try:
                    if c:
                        return v
                except ValueError:
                    raise
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["Try->If->Return"]
        assert labels(result, Outcome.FAILURE) == ["Try->Raise"]

        failure = [b for b in result.branches if b.outcome is Outcome.FAILURE][0]
        assert failure.steps[0].handler_types == ("ValueError",)
        assert failure.terminal.exc is None

    def test_try_else_is_success_path(self) -> None:
        """Test that the try-else body continues the success path."""
        result = analyze(
            """
            def load(path):
                try:
                    data = read(path)
                except OSError as e:
                    raise LoadError(path) from e
                else:
                    return data
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["Try->Return"]
        assert labels(result, Outcome.FAILURE) == ["Try->Raise"]

    def test_multiple_handlers_concatenate(self) -> None:
        """Test that every except clause contributes to the failure path."""
        result = analyze(
            """
            def f(x):
                try:
                    return int(x)
                except ValueError:
                    return 0
                except TypeError:
                    return -1
            """
        )
        failure = [b for b in result.branches if b.outcome is Outcome.FAILURE]
        assert [b.label for b in failure] == ["Try->Return", "Return"]
        assert [b.terminal.value for b in failure] == ["0", "-1"]

    def test_guarded_in_failure_path(self) -> None:
        """Test a try block nested in an else."""
        result = analyze(
            """
            def f(x):
                if x:
                    return 1
                else:
                    try:
                        return g(x)
                    except KeyError:
                        return None
            """
        )
        assert labels(result, Outcome.SUCCESS) == ["If->Return", "Try->Return"]
        assert labels(result, Outcome.FAILURE) == ["If->Try->Return"]


class TestAccumulatorContract:
    """Tests for walk() and the accumulator it returns."""

    def test_walk_returns_same_accumulator(self) -> None:
        """Test that walk extends and returns the accumulator it was given."""
        fn = make_function(TerminalReturn(value="1"))
        acc = BranchAccumulator(fn)
        assert walk(fn, acc) is acc
        assert acc.name == "f"
        assert acc.parameters == ("x",)

    def test_walk_nested_node_needs_accumulator(self) -> None:
        """Test that a non-root node cannot start a walk on its own."""
        node = Conditional(test="x", body=(TerminalReturn(value="1"),))
        with pytest.raises(TypeError):
            walk(node)

    def test_lone_return(self) -> None:
        """Test that a root-level return forms a branch by itself."""
        fn = make_function(Other(label="Assign"), TerminalReturn(value="x"))
        result = extract_branches(fn)
        assert [b.label for b in result.branches] == ["Return"]

    def test_idempotent(self) -> None:
        """Test that walking the same tree twice yields equal results."""
        fn = make_function(
            Guarded(
                body=(
                    Conditional(
                        test="x",
                        body=(TerminalReturn(value="1"),),
                        orelse=(TerminalThrow(exc="ValueError()"),),
                    ),
                ),
                handlers=(TerminalReturn(value=None),),
            ),
            TerminalReturn(value="2"),
        )
        first = extract_branches(fn)
        second = extract_branches(fn)

        assert first.success_branches == second.success_branches
        assert first.fail_branches == second.fail_branches
        assert first.branches == second.branches

    def test_only_trailing_branches_are_open(self) -> None:
        """Test that every non-empty branch except the last is complete."""
        result = analyze(
            """
            def f(a, b, c):
                if a:
                    try:
                        if b:
                            return 1
                        raise KeyError(b)
                    except KeyError:
                        if c:
                            return 2
                        return 3
                elif b:
                    return 4
                return 5
            """
        )
        for collection in (result.success_branches, result.fail_branches):
            for branch in collection[:-1]:
                assert branch.is_complete, branch

    def test_branches_filters_empty(self) -> None:
        """Test that the derived view drops empty branches."""
        fn = make_function(
            Conditional(
                test="x",
                body=(TerminalReturn(value="1"),),
                orelse=(TerminalReturn(value="2"),),
            )
        )
        result = extract_branches(fn)

        assert len(result.success_branches) == 2
        assert len(result.success_branches[-1]) == 0
        assert len(result.branches) == 2
        assert all(len(b) > 0 for b in result.branches)

    def test_success_before_failure(self) -> None:
        """Test the order of the derived branches view."""
        fn = make_function(
            Conditional(
                test="x",
                body=(TerminalReturn(value="1"),),
                orelse=(TerminalThrow(exc="E"),),
            )
        )
        outcomes = [b.outcome for b in extract_branches(fn).branches]
        assert outcomes == [Outcome.SUCCESS, Outcome.FAILURE]
