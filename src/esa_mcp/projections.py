"""Post field projections applied before results reach the caller.

esa returns the full rendered body with every post. That is far too large
for a caller with a limited context budget, so list and read results drop
body fields, and mutation results are pinned to a fixed field set.
"""
from typing import Optional

# Fields removed from search results.
LIST_EXCLUDED_FIELDS = ("body_html", "body_md")

# Fields removed from single and multiple reads; body_md is kept.
READ_EXCLUDED_FIELDS = ("body_html",)

CREATE_RESULT_FIELDS = (
    "number",
    "full_name",
    "url",
    "wip",
    "created_at",
    "message",
    "kind",
    "tags",
    "category",
    "revision_number",
    "created_by",
)

UPDATE_RESULT_FIELDS = CREATE_RESULT_FIELDS + ("updated_at", "updated_by")


def _without(post: dict, excluded: tuple[str, ...]) -> dict:
    return {key: value for key, value in post.items() if key not in excluded}


def project_list_post(post: dict) -> dict:
    """Strip body_html and body_md from a search result."""
    return _without(post, LIST_EXCLUDED_FIELDS)


def project_read_post(post: dict) -> dict:
    """Strip body_html from a read result."""
    return _without(post, READ_EXCLUDED_FIELDS)


def _project_mutation(post: Optional[dict], fields: tuple[str, ...]) -> dict:
    post = post or {}
    result = {"success": True}
    for field in fields:
        result[field] = post.get(field)
    return result


def project_created_post(post: dict) -> dict:
    return _project_mutation(post, CREATE_RESULT_FIELDS)


def project_updated_post(post: dict) -> dict:
    return _project_mutation(post, UPDATE_RESULT_FIELDS)
