"""esa.io REST API gateway.

Wraps the v1 posts endpoints behind a small async client. Every call goes
through ``_call_api`` which classifies the HTTP outcome: 200, 201 and 204
are success, anything else raises RemoteApiError carrying the remote
``message`` when the body provides one.

The gateway returns raw post records; field projection lives in
``esa_mcp.projections``.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from .config import ESA_API_KEY, get_api_base_url, get_required_env
from .errors import RemoteApiError

logger = logging.getLogger("esa-mcp.api")

SUCCESS_STATUSES = (200, 201, 204)


def _error_message(response: httpx.Response) -> str:
    """Pick the remote error message, or a generic one carrying the status."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]

    return f"Api Error: {response.status_code}"


class EsaApiClient:
    """Typed access to the esa posts API over an authenticated httpx client."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _call_api(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        response = await self._http.request(method, path, params=params, json=json)

        if response.status_code not in SUCCESS_STATUSES:
            message = _error_message(response)
            logger.error(f"{method} {path} failed with status {response.status_code}: {message}")
            raise RemoteApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def search_posts(
        self,
        team_name: str,
        query: str,
        order: str,
        sort: str,
        page: int,
        per_page: int,
    ) -> list[dict]:
        """Run one search request and return the raw post records of that page."""
        params = {
            "q": query,
            "order": order,
            "sort": sort,
            "page": page,
            "per_page": per_page,
        }
        result = await self._call_api("GET", f"/v1/teams/{team_name}/posts", params=params)
        posts = (result or {}).get("posts") or []
        logger.info(f"Search in {team_name} returned {len(posts)} posts (page {page})")
        return posts

    async def read_post(self, team_name: str, post_number: int) -> Optional[dict]:
        return await self._call_api("GET", f"/v1/teams/{team_name}/posts/{post_number}")

    async def read_posts(self, team_name: str, post_numbers: list[int]) -> list[Optional[dict]]:
        """Fetch several posts concurrently.

        Results come back in the order of ``post_numbers`` regardless of which
        request finishes first. A single failure fails the whole read.
        """
        posts = await asyncio.gather(
            *(self.read_post(team_name, number) for number in post_numbers)
        )
        logger.info(f"Read {len(posts)} posts from {team_name}")
        return list(posts)

    async def create_post(self, team_name: str, post: dict) -> Optional[dict]:
        result = await self._call_api("POST", f"/v1/teams/{team_name}/posts", json={"post": post})
        logger.info(f"Created post #{(result or {}).get('number')} in {team_name}")
        return result

    async def update_post(self, team_name: str, post_number: int, post: dict) -> Optional[dict]:
        result = await self._call_api(
            "PATCH", f"/v1/teams/{team_name}/posts/{post_number}", json={"post": post}
        )
        logger.info(f"Updated post #{post_number} in {team_name}")
        return result

    async def delete_post(self, team_name: str, post_number: int) -> None:
        await self._call_api("DELETE", f"/v1/teams/{team_name}/posts/{post_number}")
        logger.info(f"Deleted post #{post_number} in {team_name}")


@asynccontextmanager
async def open_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> AsyncIterator[EsaApiClient]:
    """Open an authenticated client for the duration of one tool call.

    The API key is read from ``ESA_API_KEY`` when not given. No timeout is
    set; a hung request hangs the call.
    """
    api_key = api_key or get_required_env(ESA_API_KEY)
    headers = {"Authorization": f"Bearer {api_key}"}

    async with httpx.AsyncClient(
        base_url=base_url or get_api_base_url(),
        headers=headers,
        timeout=None,
    ) as http:
        yield EsaApiClient(http)
