"""
Language parsers: Turn source files into function descriptors.

This module provides the parsing layer that converts source files into the
statement model walked by the path extractor.

Components:
    - LanguageParser: Protocol defining the parser interface
    - PythonParser: AST-based parser for Python files
    - ParseResult: Container for the extracted function descriptors

The parser maps each statement to one of:
    - Conditional: if/elif/else
    - Guarded: try/except (and try/except*)
    - TerminalReturn / TerminalThrow: return and raise
    - Other: everything else

Adding a new language:
    1. Create a new parser class implementing LanguageParser protocol
    2. Implement parse() to return ParseResult
    3. Implement supports() to check file extensions
"""

from pathseed.languages.base import LanguageParser
from pathseed.languages.models import ParseResult
from pathseed.languages.python import PythonParser

__all__ = [
    "LanguageParser",
    "ParseResult",
    "PythonParser",
]
