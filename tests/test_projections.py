"""Tests for post field projections."""
from esa_mcp.projections import (
    CREATE_RESULT_FIELDS,
    project_created_post,
    project_list_post,
    project_read_post,
    project_updated_post,
)

from conftest import make_post


class TestBodyProjections:
    """Body fields are too large to hand back to the caller."""

    def test_list_projection_drops_both_bodies(self):
        """Test that search results lose body_html and body_md."""
        projected = project_list_post(make_post(1))

        assert "body_html" not in projected
        assert "body_md" not in projected
        assert projected["number"] == 1
        assert projected["name"] == "Post 1"

    def test_read_projection_keeps_markdown(self):
        """Test that reads lose body_html but keep body_md."""
        projected = project_read_post(make_post(1))

        assert "body_html" not in projected
        assert projected["body_md"] == "# Post 1\nbody"

    def test_unknown_fields_are_kept(self):
        """Test that fields outside the body set are kept unchanged."""
        projected = project_list_post(make_post(1, stargazers_count=4, sharing_urls=None))

        assert projected["stargazers_count"] == 4
        assert "sharing_urls" in projected

    def test_input_is_not_modified(self):
        """Test that projection does not mutate the raw record."""
        post = make_post(1)
        project_list_post(post)
        assert "body_html" in post


class TestMutationProjections:
    """Create and update results are pinned to a fixed field set."""

    def test_create_projection_fields(self):
        """Test that create results carry exactly the pinned fields."""
        projected = project_created_post(make_post(7))

        assert list(projected) == ["success", *CREATE_RESULT_FIELDS]
        assert projected["success"] is True
        assert projected["number"] == 7
        assert projected["url"] == "https://docs.esa.io/posts/7"
        assert "body_md" not in projected
        assert "updated_at" not in projected

    def test_update_projection_adds_update_fields(self):
        """Test that update results add updated_at and updated_by."""
        projected = project_updated_post(make_post(7))

        assert projected["updated_at"] == "2024-01-02T10:00:00+09:00"
        assert projected["updated_by"] == {"name": "Bob", "screen_name": "bob"}
        assert projected["success"] is True

    def test_missing_fields_are_kept_as_none(self):
        """Test that absent allow-listed fields are emitted as None."""
        projected = project_created_post({"number": 3})

        assert projected["number"] == 3
        assert projected["category"] is None
