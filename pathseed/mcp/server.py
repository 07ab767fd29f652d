"""MCP server implementation for Pathseed."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from pathseed.core.analyzer import Analyzer, FileAnalysis
from pathseed.core.exceptions import PathseedError
from pathseed.core.paths.serialize import function_to_dict
from pathseed.render import render_module

server = Server("pathseed")


def _analyze(path: str, include_private: bool = False) -> FileAnalysis:
    """Analyze a file relative to the current directory."""
    file = Path(path)
    if not file.is_absolute():
        file = Path.cwd() / file
    if not file.is_file():
        raise FileNotFoundError(f"No such Python file: {file}")
    return Analyzer(include_private=include_private).analyze_file(file)


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="pathseed_branches",
            description=(
                "List the success and failure branches of the exported functions "
                "in a Python file. Each branch is the chain of if/try decisions "
                "leading to a return or raise."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the Python file",
                    },
                    "function": {
                        "type": "string",
                        "description": "Only this function (optional)",
                    },
                    "include_private": {
                        "type": "boolean",
                        "description": "Include functions starting with '_' (default: false)",
                        "default": False,
                    },
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="pathseed_stubs",
            description=(
                "Generate a pytest module with one commented test stub per branch "
                "of each exported function in a Python file."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the Python file",
                    },
                    "module": {
                        "type": "string",
                        "description": "Module name to import from (default: file stem)",
                    },
                },
                "required": ["path"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "pathseed_branches":
            result = _handle_branches(
                arguments["path"],
                arguments.get("function"),
                arguments.get("include_private", False),
            )
        elif name == "pathseed_stubs":
            result = _handle_stubs(arguments["path"], arguments.get("module"))
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (FileNotFoundError, PathseedError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_branches(
    path: str, function: str | None = None, include_private: bool = False
) -> dict[str, Any]:
    """Handle pathseed_branches tool."""
    analysis = _analyze(path, include_private)
    results = [analysis.get(function)] if function else analysis.results
    return {
        "file": str(analysis.file),
        "functions": [function_to_dict(r) for r in results],
    }


def _handle_stubs(path: str, module: str | None = None) -> dict[str, Any]:
    """Handle pathseed_stubs tool."""
    analysis = _analyze(path)
    return {
        "file": str(analysis.file),
        "stubs": render_module(analysis, module_name=module),
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
