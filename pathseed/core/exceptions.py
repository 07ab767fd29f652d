"""Pathseed custom exceptions."""


class PathseedError(Exception):
    """Base exception for Pathseed errors."""


class FunctionNotFoundError(PathseedError):
    """Function not found in the analyzed source."""


class ParseError(PathseedError):
    """Error parsing a source file."""
