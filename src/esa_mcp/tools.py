"""esa MCP tool definitions and registry.

This module provides the definitive list of tools exposed by the server and
dispatches tool calls: validate arguments, run the handler, wrap the result.
"""
import logging
from dataclasses import dataclass
from typing import Any, AsyncContextManager, Awaitable, Callable, Optional

from mcp.types import CallToolResult, Tool

from . import handlers
from .api import EsaApiClient, open_client
from .config import DEFAULT_ESA_TEAM, get_required_env
from .errors import UnknownToolError
from .formatting import format_tool
from .schemas import (
    CreatePostArguments,
    DeletePostArguments,
    NoArguments,
    ReadMultiplePostsArguments,
    ReadPostArguments,
    SearchPostsArguments,
    ToolArguments,
    UpdatePostArguments,
    validate_arguments,
    with_team_default,
)

logger = logging.getLogger("esa-mcp.tools")

ClientFactory = Callable[[], AsyncContextManager[EsaApiClient]]

SEARCH_DESCRIPTION = (
    "Search posts in esa.io. Response is paginated. "
    "For efficient search, you can use customized queries like the following: "
    'keyword for partial match, "keyword" for exact match, '
    "keyword1 keyword2 for AND match, "
    "keyword1 OR keyword2 for OR match, "
    "-keyword for excluding keywords, "
    "title:keyword for title match, "
    "wip:true or wip:false for WIP posts, "
    "kind:stock or kind:flow for kind match, "
    "category:category_name for partial match with category name, "
    "in:category_name for prefix match with category name, "
    "on:category_name for exact match with category name, "
    "body:keyword for body match, "
    "tag:tag_name or tag:tag_name case_sensitive:true for tag match, "
    "user:screen_name for post author's screen name, "
    "updated_by:screen_name for post updater's screen name, "
    "comment:keyword for partial match with comments, "
    "starred:true or starred:false for starred posts, "
    "watched:true or watched:false for watched posts, "
    "watched_by:screen_name for screen name of members watching the post, "
    "sharing:true or sharing:false for shared posts, "
    "stars:>3 for posts with more than 3 stars, "
    "watches:>3 for posts with more than 3 watches, "
    "comments:>3 for posts with more than 3 comments, "
    "done:>=3 for posts with 3 or more done items, "
    "undone:>=3 for posts with 3 or more undone items, "
    "created:>YYYY-MM-DD for filtering by creation date, "
    "updated:>YYYY-MM-DD for filtering by update date. "
    "nextPage in the response is always page + 1; an empty posts list means there are no more results."
)


@dataclass(frozen=True)
class ToolDefinition:
    """A named tool: its description, argument schema and handler."""

    name: str
    description: str
    arguments_model: type[ToolArguments]
    handler: Callable[..., Awaitable[Any]]
    uses_api: bool = True
    plain_text: bool = False

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.arguments_model.model_json_schema(by_alias=True),
        )


def build_tool_definitions(default_team: str) -> list[ToolDefinition]:
    """Build every tool definition with ``teamName`` defaulting to ``default_team``."""
    return [
        ToolDefinition(
            name="get_search_query_document",
            description="Get the reference document for the esa.io search query syntax "
                        "used by search_esa_posts.",
            arguments_model=NoArguments,
            handler=handlers.handle_get_search_query_document,
            uses_api=False,
            plain_text=True,
        ),
        ToolDefinition(
            name="search_esa_posts",
            description=SEARCH_DESCRIPTION,
            arguments_model=with_team_default(SearchPostsArguments, default_team),
            handler=handlers.handle_search_esa_posts,
        ),
        ToolDefinition(
            name="read_esa_post",
            description="Read a post in esa.io.",
            arguments_model=with_team_default(ReadPostArguments, default_team),
            handler=handlers.handle_read_esa_post,
        ),
        ToolDefinition(
            name="read_esa_multiple_posts",
            description="Read multiple posts in esa.io. Posts are returned in the order of postNumbers.",
            arguments_model=with_team_default(ReadMultiplePostsArguments, default_team),
            handler=handlers.handle_read_esa_multiple_posts,
        ),
        ToolDefinition(
            name="create_esa_post",
            description="Create a new post in esa.io. Required parameters: name. "
                        "Optional parameters: body_md, tags, category, wip (default: true), message.",
            arguments_model=with_team_default(CreatePostArguments, default_team),
            handler=handlers.handle_create_esa_post,
        ),
        ToolDefinition(
            name="update_esa_post",
            description="Update an existing post in esa.io. Required parameters: postNumber. "
                        "Optional parameters: name, body_md, tags, category, wip, message.",
            arguments_model=with_team_default(UpdatePostArguments, default_team),
            handler=handlers.handle_update_esa_post,
        ),
        ToolDefinition(
            name="delete_esa_post",
            description="Delete a post in esa.io. Required parameters: postNumber.",
            arguments_model=with_team_default(DeletePostArguments, default_team),
            handler=handlers.handle_delete_esa_post,
        ),
    ]


class ToolRegistry:
    """Registered tools plus the dispatch that turns calls into tool results.

    ``default_team`` falls back to ``DEFAULT_ESA_TEAM``; a missing value
    raises ConfigurationError here, before any tool can be listed.
    """

    def __init__(self, default_team: Optional[str] = None, client_factory: ClientFactory = open_client):
        if default_team is None:
            default_team = get_required_env(DEFAULT_ESA_TEAM)

        self.default_team = default_team
        self._client_factory = client_factory
        self._definitions = {d.name: d for d in build_tool_definitions(default_team)}
        logger.info(f"Registered {len(self._definitions)} tools (default team: {default_team})")

    @property
    def definitions(self) -> list[ToolDefinition]:
        return list(self._definitions.values())

    def get_tools(self) -> list[Tool]:
        return [definition.to_tool() for definition in self._definitions.values()]

    async def call(self, name: str, arguments: Optional[dict]) -> CallToolResult:
        """Run one tool invocation. Never raises; failures become error results."""
        logger.info(f"Tool call: {name}")
        definition = self._definitions.get(name)

        async def operation() -> Any:
            if definition is None:
                raise UnknownToolError(name)

            validated = validate_arguments(name, definition.arguments_model, arguments)
            if not definition.uses_api:
                return await definition.handler(validated)

            async with self._client_factory() as client:
                return await definition.handler(validated, client)

        return await format_tool(operation, plain_text=definition is not None and definition.plain_text)

