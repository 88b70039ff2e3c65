"""esa MCP Server - Model Context Protocol integration for esa.io.

This package exposes esa.io posts (search, read, create, update, delete) to
AI assistants as MCP tools.

Modules:
- server: stdio MCP server implementation
- tools: tool definitions and dispatch
- handlers: tool implementation handlers
- api: esa REST API gateway
- projections: post field projections
- formatting: tool result envelope formatting
"""

__version__ = "1.0.0"

from . import formatting
from . import tools
from . import handlers

__all__ = ["formatting", "tools", "handlers", "__version__"]
