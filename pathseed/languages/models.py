"""Data models for language parser results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pathseed.core.models import FunctionDescriptor


@dataclass
class ParseResult:
    """Result of parsing a file."""

    file: Path
    module: str
    functions: list[FunctionDescriptor]
    exported_names: list[str] | None = None
