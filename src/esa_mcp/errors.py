"""Exception types raised by the esa MCP adapter.

Every exception here is caught by the response formatter and rendered as a
single ``Error: <Kind>: <message>`` line. Only ``ConfigurationError`` raised
while building the tool registry is allowed to abort the process.
"""
from typing import Optional


class EsaMcpError(Exception):
    """Base class for adapter errors."""
    pass


class ConfigurationError(EsaMcpError):
    """Raised when a required environment value is missing."""

    def __init__(self, key: str):
        super().__init__(f"Missing required environment: {key}")
        self.key = key


class ValidationError(EsaMcpError):
    """Raised when tool arguments fail their schema.

    ``violations`` is a list of ``{"field": ..., "message": ...}`` entries,
    one per offending argument.
    """

    def __init__(self, tool_name: str, violations: list[dict]):
        details = "; ".join(f"{v['field']}: {v['message']}" for v in violations)
        super().__init__(f"Invalid arguments for {tool_name}: {details}")
        self.tool_name = tool_name
        self.violations = violations


class RemoteApiError(EsaMcpError):
    """Raised when the esa API answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(EsaMcpError):
    """Raised when a single-post read yields no record."""
    pass


class UnknownToolError(EsaMcpError):
    """Raised when an invocation names a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name
