"""esa MCP tool handlers.

All API-backed handlers follow the same pattern:
- Accept: validated arguments model and an EsaApiClient
- Return: the caller-facing result (dict, list or None), already projected
- Raise on failure; the registry wraps both outcomes into the tool envelope

Handlers never build response envelopes themselves.
"""
import logging
from pathlib import Path
from typing import Optional

from . import projections
from .api import EsaApiClient
from .errors import NotFoundError
from .schemas import (
    CreatePostArguments,
    DeletePostArguments,
    ReadMultiplePostsArguments,
    ReadPostArguments,
    SearchPostsArguments,
    UpdatePostArguments,
)

logger = logging.getLogger("esa-mcp.handlers")

GUIDE_DIR = Path(__file__).parent / "guide"


def load_search_query_document() -> str:
    """Load the esa search query reference shipped with the package.

    Raises:
        FileNotFoundError: If the document is missing from the installation
    """
    document_path = GUIDE_DIR / "search_query.md"
    if not document_path.exists():
        raise FileNotFoundError(f"Search query document not found: {document_path}")

    return document_path.read_text(encoding="utf-8")


# ============================================================================
# Search Handlers
# ============================================================================

async def handle_search_esa_posts(arguments: SearchPostsArguments, client: EsaApiClient) -> dict:
    """Search posts and return one page without body fields.

    ``nextPage`` is always ``page + 1``. It is not a signal that more results
    exist; an empty ``posts`` list is the end of the results.
    """
    posts = await client.search_posts(
        arguments.team_name,
        arguments.query,
        arguments.order,
        arguments.sort,
        arguments.page,
        arguments.per_page,
    )

    return {
        "posts": [projections.project_list_post(post) for post in posts],
        "nextPage": arguments.page + 1,
    }


async def handle_get_search_query_document(arguments, client: Optional[EsaApiClient] = None) -> str:
    return load_search_query_document()


# ============================================================================
# Read Handlers
# ============================================================================

async def handle_read_esa_post(arguments: ReadPostArguments, client: EsaApiClient) -> dict:
    posts = await client.read_posts(arguments.team_name, [arguments.post_number])
    if not posts or posts[0] is None:
        raise NotFoundError("post not found")

    return projections.project_read_post(posts[0])


async def handle_read_esa_multiple_posts(arguments: ReadMultiplePostsArguments, client: EsaApiClient) -> list[dict]:
    """Read posts in parallel, returned in the order they were requested."""
    posts = await client.read_posts(arguments.team_name, arguments.post_numbers)
    if any(post is None for post in posts):
        raise NotFoundError("post not found")
    return [projections.project_read_post(post) for post in posts]


# ============================================================================
# Mutation Handlers
# ============================================================================

async def handle_create_esa_post(arguments: CreatePostArguments, client: EsaApiClient) -> dict:
    result = await client.create_post(arguments.team_name, arguments.post_payload())
    return projections.project_created_post(result)


async def handle_update_esa_post(arguments: UpdatePostArguments, client: EsaApiClient) -> dict:
    """Update only the fields that were provided; everything else is left as is."""
    payload = arguments.post_payload()
    logger.info(f"Updating post #{arguments.post_number} fields: {', '.join(payload) or '(none)'}")

    result = await client.update_post(arguments.team_name, arguments.post_number, payload)
    return projections.project_updated_post(result)


async def handle_delete_esa_post(arguments: DeletePostArguments, client: EsaApiClient) -> None:
    await client.delete_post(arguments.team_name, arguments.post_number)
