"""Shared fixtures: an in-memory esa API served through httpx.MockTransport."""
import asyncio
import json
import re
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import pytest

from esa_mcp.api import EsaApiClient
from esa_mcp.tools import ToolRegistry

BASE_URL = "https://api.esa.io"
POSTS_PATH = re.compile(r"^/v1/teams/(?P<team>[^/]+)/posts$")
POST_PATH = re.compile(r"^/v1/teams/(?P<team>[^/]+)/posts/(?P<number>\d+)$")


def make_post(number: int, **overrides) -> dict:
    """Build a post record shaped like the esa API returns it."""
    post = {
        "number": number,
        "name": f"Post {number}",
        "full_name": f"dev/Post {number}",
        "wip": False,
        "body_md": f"# Post {number}\nbody",
        "body_html": f"<h1>Post {number}</h1><p>body</p>",
        "created_at": "2024-01-01T10:00:00+09:00",
        "updated_at": "2024-01-02T10:00:00+09:00",
        "message": "initial",
        "url": f"https://docs.esa.io/posts/{number}",
        "tags": ["api"],
        "category": "dev",
        "revision_number": 1,
        "kind": "stock",
        "created_by": {"name": "Alice", "screen_name": "alice"},
        "updated_by": {"name": "Bob", "screen_name": "bob"},
    }
    post.update(overrides)
    return post


class FakeEsaApi:
    """Scripted esa API.

    ``posts`` backs the default routes; ``responses`` overrides a
    ``(method, path)`` with a fixed response; ``delays`` holds per-post-number
    sleeps so reads can finish out of order.
    """

    def __init__(self):
        self.posts: dict[int, dict] = {}
        self.search_results: Optional[list[dict]] = None
        self.responses: dict[tuple[str, str], httpx.Response] = {}
        self.delays: dict[int, float] = {}
        self.requests: list[httpx.Request] = []
        self.completed: list[int] = []

    def add_posts(self, *numbers: int) -> None:
        for number in numbers:
            self.posts[number] = make_post(number)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        override = self.responses.get((request.method, request.url.path))
        if override is not None:
            return override

        if match := POST_PATH.match(request.url.path):
            number = int(match["number"])
            if number in self.delays:
                await asyncio.sleep(self.delays[number])
            response = self._handle_post(request, number)
            self.completed.append(number)
            return response

        if POSTS_PATH.match(request.url.path):
            if request.method == "GET":
                posts = self.search_results if self.search_results is not None else list(self.posts.values())
                return httpx.Response(200, json={"posts": posts, "next_page": None, "total_count": len(posts)})
            if request.method == "POST":
                body = json.loads(request.content)["post"]
                number = max(self.posts, default=0) + 1
                self.posts[number] = make_post(number, **body)
                return httpx.Response(201, json=self.posts[number])

        return httpx.Response(404, json={"error": "not_found", "message": "Not found"})

    def _handle_post(self, request: httpx.Request, number: int) -> httpx.Response:
        if number not in self.posts:
            return httpx.Response(404, json={"error": "not_found", "message": "Not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self.posts[number])
        if request.method == "PATCH":
            body = json.loads(request.content)["post"]
            post = self.posts[number]
            post.update(body)
            post["revision_number"] += 1
            post["updated_at"] = "2024-02-01T10:00:00+09:00"
            return httpx.Response(200, json=post)
        if request.method == "DELETE":
            del self.posts[number]
            return httpx.Response(204)

        return httpx.Response(405, json={"message": "Method not allowed"})

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            base_url=BASE_URL,
            headers={"Authorization": "Bearer test-token"},
        )

    @asynccontextmanager
    async def client_factory(self):
        async with self.http_client() as http:
            yield EsaApiClient(http)


@pytest.fixture
def esa_api():
    """In-memory esa API with no posts."""
    return FakeEsaApi()


@pytest.fixture
def registry(esa_api):
    """Tool registry wired to the fake API, default team 'docs'."""
    return ToolRegistry(default_team="docs", client_factory=esa_api.client_factory)
