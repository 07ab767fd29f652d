"""Protocol for language parsers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathseed.languages.models import ParseResult


class LanguageParser(Protocol):
    """Protocol for language parsers."""

    def parse(self, file: Path, module: str | None = None) -> ParseResult:
        """Parse a file and extract its function descriptors."""
        ...

    def parse_source(
        self, source: str, file: Path | str = "<string>", module: str | None = None
    ) -> ParseResult:
        """Parse in-memory source text."""
        ...

    def supports(self, file: Path) -> bool:
        """Check if this parser supports the given file."""
        ...
