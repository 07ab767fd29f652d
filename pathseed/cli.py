"""CLI entry point for Pathseed."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from pathseed.core.analyzer import Analyzer, FileAnalysis
from pathseed.core.exceptions import PathseedError
from pathseed.core.models import Conditional, Guarded, Statement, TerminalReturn, TerminalThrow
from pathseed.core.paths import Branch, BranchAccumulator, Outcome
from pathseed.core.paths.serialize import function_to_dict
from pathseed.render import render_module

app = typer.Typer(
    name="pathseed",
    help="Extract success and failure paths from Python functions and seed pytest stubs.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

_MAX_CONDITION_DISPLAY = 40

PrivateOption = Annotated[
    bool, typer.Option("--private", help="Include functions whose name starts with '_'")
]
MethodsOption = Annotated[
    bool, typer.Option("--methods", "-m", help="Include methods of module-level classes")
]
FunctionOption = Annotated[
    str | None, typer.Option("--function", "-f", help="Only this function")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def analyze(path: Path, private: bool, methods: bool, function: str | None) -> FileAnalysis:
    """Analyze one file, exiting with an error message on failure."""
    analyzer = Analyzer(include_private=private, include_methods=methods)
    try:
        analysis = analyzer.analyze_file(path)
        if function:
            analysis.results = [analysis.get(function)]
    except PathseedError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    return analysis


def format_step(step: Statement, outcome: Outcome) -> str:
    """Format one branch step as a rich markup string."""
    if isinstance(step, Conditional):
        cond = step.test
        if len(cond) > _MAX_CONDITION_DISPLAY:
            cond = cond[: _MAX_CONDITION_DISPLAY - 3] + "..."
        prefix = "else " if outcome is Outcome.FAILURE else "if "
        return f"[yellow]{prefix}{escape(cond)}[/]"
    if isinstance(step, Guarded):
        if outcome is Outcome.FAILURE:
            types = escape(", ".join(step.handler_types))
            return f"[yellow]except{' ' + types if types else ''}[/]"
        return "[yellow]try[/]"
    if isinstance(step, TerminalThrow):
        return f"[red]raise{' ' + escape(step.exc) if step.exc else ''}[/]"
    if isinstance(step, TerminalReturn):
        return f"[green]return{' ' + escape(step.value) if step.value else ''}[/]"
    return f"[dim]{step.label}[/]"


def format_branch(branch: Branch) -> str:
    return " [dim]→[/] ".join(format_step(s, branch.outcome) for s in branch)


def print_result(result: BranchAccumulator) -> None:
    function = result.function
    params = escape(", ".join(function.parameters))
    console.print(f"\n[bold cyan]{function.qualified_name}[/]({params})")
    console.print(f"  [dim]line {function.line}[/]")

    if not result.branches:
        console.print("  [dim]No branches found[/]")
        return

    for branch in result.branches:
        marker = "[green]✓[/]" if branch.outcome is Outcome.SUCCESS else "[red]✗[/]"
        console.print(f"  {marker} {format_branch(branch)}")


@app.command()
def stubs(
    path: Annotated[Path, typer.Argument(help="Python file to analyze")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write stubs to this file")
    ] = None,
    function: FunctionOption = None,
    private: PrivateOption = False,
    methods: MethodsOption = False,
) -> None:
    """Generate pytest stubs, one per branch of each function."""
    analysis = analyze(path, private, methods, function)
    text = render_module(analysis)

    if output is None:
        print(text, end="")
        return

    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote {output}[/green]")


@app.command()
def branches(
    path: Annotated[Path, typer.Argument(help="Python file to analyze")],
    function: FunctionOption = None,
    private: PrivateOption = False,
    methods: MethodsOption = False,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List the success and failure branches of each function."""
    analysis = analyze(path, private, methods, function)

    if output_json:
        result = {
            "file": str(analysis.file),
            "module": analysis.module,
            "functions": [function_to_dict(r) for r in analysis.results],
        }
        print(json.dumps(result))
        return

    if not analysis.results:
        console.print(f"No exported functions in '[cyan]{path}[/cyan]'")
        return

    for result in analysis.results:
        print_result(result)


@app.command()
def scan(
    path: Annotated[Path, typer.Argument(help="Directory to scan")] = Path("."),
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-e", help="Patterns to exclude")
    ] = None,
    private: PrivateOption = False,
    methods: MethodsOption = False,
) -> None:
    """Scan a directory and summarize the branches found."""
    path = path.resolve()
    analyzer = Analyzer(include_private=private, include_methods=methods)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Scanning [cyan]{path.name}[/]", total=None)

        def on_progress(file: Path, current: int, total: int) -> None:
            progress.update(task, total=total, completed=current)
            try:
                rel_path: Path | str = file.relative_to(path)
            except ValueError:
                rel_path = file.name
            progress.update(task, description=f"[cyan]{rel_path}[/]")

        _, stats = analyzer.analyze_directory(
            path, exclude_patterns=exclude or [], on_progress=on_progress
        )

    console.print("[green]Done![/green]")
    console.print(f"  Files analyzed: {stats.files}")
    console.print(f"  Functions: {stats.functions}")
    console.print(
        f"  Branches: {stats.branches} "
        f"([green]{stats.success} success[/], [red]{stats.failure} failure[/])"
    )

    if stats.skipped:
        console.print(f"  [dim]Skipped: {stats.skipped}[/]")
    if stats.errors:
        console.print(f"  [red]Errors: {len(stats.errors)}[/red]")
        for error in stats.errors:
            console.print(f"    {error}")


if __name__ == "__main__":
    app()
