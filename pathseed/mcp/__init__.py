"""
MCP server for Pathseed.

Exposes branch extraction to LLMs via the Model Context Protocol.

Tools:
    - pathseed_branches: List success/failure branches of a file's functions
    - pathseed_stubs: Generate pytest stubs for a file

Usage:
    Install: pip install pathseed
    Run: mcp-server-pathseed
"""

import asyncio

from pathseed.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
