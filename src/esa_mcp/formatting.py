"""Response envelope formatting shared by every tool.

``format_tool`` runs a tool operation and always returns a CallToolResult:
one YAML text entry on success, or one ``Error: ...`` line with ``isError``
set when anything raised along the way.
"""
import enum
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Awaitable, Callable

import yaml
from mcp.types import CallToolResult, TextContent

logger = logging.getLogger("esa-mcp.formatting")

SUCCESS = "success"


class ResultShape(str, enum.Enum):
    """Shape of a tool result, one normalization rule per member."""

    EMPTY = "empty"
    SEQUENCE = "sequence"
    TAGGED_OBJECT = "tagged_object"
    PLAIN_OBJECT = "plain_object"
    SCALAR = "scalar"


def classify_result(value: Any) -> ResultShape:
    if value is None or value == "":
        return ResultShape.EMPTY
    if isinstance(value, Mapping):
        return ResultShape.TAGGED_OBJECT if "status" in value else ResultShape.PLAIN_OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return ResultShape.SEQUENCE
    return ResultShape.SCALAR


def normalize_result(value: Any) -> Any:
    """Turn a raw tool result into the payload that gets serialized.

    - empty string or None -> "success"
    - mapping without "status" -> {"status": "success", **mapping}
    - sequences, mappings with "status" and other scalars pass through
    """
    shape = classify_result(value)

    if shape is ResultShape.EMPTY:
        return SUCCESS
    if shape is ResultShape.PLAIN_OBJECT:
        return {"status": SUCCESS, **value}
    if shape is ResultShape.SEQUENCE:
        return list(value)
    if shape is ResultShape.TAGGED_OBJECT:
        return dict(value)
    return value


def to_yaml(payload: Any) -> str:
    text = yaml.safe_dump(payload, allow_unicode=True, sort_keys=False, default_flow_style=False)
    # Bare scalars get a "..." document end marker.
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text


def format_error(error: BaseException) -> str:
    """Render a failure as a single ``Error: ...`` line."""
    if type(error) is Exception:
        return f"Error: {error}"
    return f"Error: {type(error).__name__}: {error}"


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


async def format_tool(operation: Callable[[], Awaitable[Any]], plain_text: bool = False) -> CallToolResult:
    """Run ``operation`` and wrap its outcome in the tool result envelope.

    With ``plain_text`` the operation's string result is returned verbatim
    instead of being normalized and serialized. Failures are wrapped the
    same way in both modes.
    """
    try:
        result = await operation()
        if plain_text:
            return text_result(result)
        return text_result(to_yaml(normalize_result(result)))
    except Exception as e:
        logger.error(f"Error in tool operation: {type(e).__name__}: {e}", exc_info=True)
        return text_result(format_error(e), is_error=True)
