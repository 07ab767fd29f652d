"""Analyzer that coordinates parsing and path extraction."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pathseed.core.exceptions import FunctionNotFoundError, ParseError
from pathseed.core.models import AnalysisStats
from pathseed.core.paths import BranchAccumulator, Outcome, extract_branches
from pathseed.languages import LanguageParser, PythonParser

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, int, int], None]

DEFAULT_EXCLUDES = [
    "__pycache__",
    "*.egg-info",
    "node_modules",
    "build",
    "dist",
    "venv",
    ".venv",
]


@dataclass
class FileAnalysis:
    """Branches extracted from every exported function of one file."""

    file: Path
    module: str
    results: list[BranchAccumulator] = field(default_factory=list)

    def get(self, name: str) -> BranchAccumulator:
        """Get the result for a function by name or qualified name."""
        for result in self.results:
            if name in (result.name, result.function.qualified_name):
                return result
        raise FunctionNotFoundError(f"Function '{name}' not found in {self.file}")

    def __len__(self) -> int:
        return len(self.results)


class Analyzer:
    """Coordinates file parsing and branch extraction."""

    def __init__(
        self,
        include_private: bool = False,
        include_methods: bool = False,
        parser: LanguageParser | None = None,
    ) -> None:
        """Initialize with export options, or with a ready-made parser."""
        self._parser: LanguageParser = parser or PythonParser(
            include_private=include_private,
            include_methods=include_methods,
        )

    def analyze_file(self, file: Path, module: str | None = None) -> FileAnalysis:
        """Analyze a single file.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        result = self._parser.parse(file, module=module)
        logger.info("analyzing %s (%d functions)", file, len(result.functions))
        return FileAnalysis(
            file=result.file,
            module=result.module,
            results=[extract_branches(fn) for fn in result.functions],
        )

    def analyze_source(self, source: str, filename: str = "<string>") -> FileAnalysis:
        """Analyze Python source text."""
        result = self._parser.parse_source(source, filename)
        return FileAnalysis(
            file=result.file,
            module=result.module,
            results=[extract_branches(fn) for fn in result.functions],
        )

    def analyze_directory(
        self,
        directory: Path,
        exclude_patterns: list[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> tuple[list[FileAnalysis], AnalysisStats]:
        """Analyze all Python files in a directory.

        Files that fail to parse are recorded in the stats instead of
        aborting the run.

        Args:
            directory: Directory to analyze
            exclude_patterns: Additional glob patterns to exclude (e.g., "tests")
            on_progress: Optional callback for progress updates (file, current, total)

        Returns:
            The per-file analyses and the accumulated AnalysisStats
        """
        all_excludes = DEFAULT_EXCLUDES + (exclude_patterns or [])
        stats = AnalysisStats()
        analyses: list[FileAnalysis] = []

        python_files = sorted(
            f for f in directory.rglob("*") if f.is_file() and self._parser.supports(f)
        )
        total_files = len(python_files)

        for i, file in enumerate(python_files):
            relative_path = file.relative_to(directory)
            if self._should_exclude(str(relative_path), all_excludes):
                stats.skipped += 1
                if on_progress:
                    on_progress(file, i + 1, total_files)
                continue

            try:
                analysis = self.analyze_file(file, module=path_to_module(relative_path))
            except ParseError as e:
                logger.warning("skipping %s: %s", relative_path, e)
                stats.errors.append(str(e))
            else:
                analyses.append(analysis)
                _add_to_stats(stats, analysis)

            if on_progress:
                on_progress(file, i + 1, total_files)

        return analyses, stats

    def _should_exclude(self, path: str, patterns: list[str]) -> bool:
        """Check if a path matches any exclusion pattern.

        Excludes:
        - Any path component starting with '.' (hidden files/directories)
        - Any path component, or the whole relative path, matching a pattern
        """
        for pattern in patterns:
            if fnmatch.fnmatch(path, pattern):
                return True
        for part in Path(path).parts:
            if part.startswith("."):
                return True
            for pattern in patterns:
                if fnmatch.fnmatch(part, pattern):
                    return True
        return False


def path_to_module(path: Path) -> str:
    """Convert a relative file path to a module name."""
    parts = list(path.with_suffix("").parts)

    if parts and parts[0] == "src":
        parts = parts[1:]
    if parts and parts[-1] == "__init__":
        parts = parts[:-1]
    return ".".join(parts)


def _add_to_stats(stats: AnalysisStats, analysis: FileAnalysis) -> None:
    stats.files += 1
    for result in analysis.results:
        stats.functions += 1
        for branch in result.branches:
            stats.branches += 1
            if branch.outcome is Outcome.SUCCESS:
                stats.success += 1
            else:
                stats.failure += 1
