"""Pydantic schemas for tool arguments.

Argument names follow the tool surface (camelCase aliases such as
``teamName`` and ``perPage``); Python code uses the snake_case field names.
The ``teamName`` default is only known once configuration is read, so each
model is bound to it with ``with_team_default`` when the registry is built.
"""
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

Order = Literal["asc", "desc"]
Sort = Literal["created", "updated", "number", "stars", "comments", "best_match"]


def _integral_float_to_int(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# JSON numbers such as 3.0 are valid integers; numeric strings stay rejected.
Integer = Annotated[int, BeforeValidator(_integral_float_to_int)]


class ToolArguments(BaseModel):
    """Base for tool argument models (strict scalars, unknown keys ignored)."""

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")


class TeamArguments(ToolArguments):
    team_name: str = Field(..., alias="teamName", description="esa team name")


class NoArguments(ToolArguments):
    pass


class SearchPostsArguments(TeamArguments):
    query: str = Field(..., description="esa search query, passed through as-is")
    order: Order = Field("desc", description="Sort direction")
    sort: Sort = Field("best_match", description="Sort key")
    page: Integer = Field(1, ge=1, description="Page number (starts at 1)")
    per_page: Integer = Field(50, ge=1, le=100, alias="perPage", description="Posts per page (1-100)")


class ReadPostArguments(TeamArguments):
    post_number: Integer = Field(..., alias="postNumber", description="Post number")


class ReadMultiplePostsArguments(TeamArguments):
    post_numbers: list[Integer] = Field(..., alias="postNumbers", description="Post numbers, in the order results should be returned")


class PostFields(TeamArguments):
    """Post content accepted on create and update."""

    body_md: Optional[str] = Field(None, description="Post body in markdown")
    tags: Optional[list[str]] = Field(None, description="Tags without the leading #")
    category: Optional[str] = Field(None, description="Category path, e.g. dev/2024/notes")
    message: Optional[str] = Field(None, description="Change message")

    def post_payload(self) -> dict:
        """Outbound ``post`` body: only the content fields that were provided."""
        return self.model_dump(exclude={"team_name", "post_number"}, exclude_none=True)


class CreatePostArguments(PostFields):
    name: str = Field(..., description="Post title")
    wip: bool = Field(True, description="Save as work in progress")


class UpdatePostArguments(PostFields):
    post_number: Integer = Field(..., alias="postNumber", description="Number of the post to update")
    name: Optional[str] = Field(None, description="New post title")
    wip: Optional[bool] = Field(None, description="Work in progress flag")


class DeletePostArguments(TeamArguments):
    post_number: Integer = Field(..., alias="postNumber", description="Number of the post to delete")


def with_team_default(model: type[TeamArguments], default_team: str) -> type[TeamArguments]:
    """Return a subclass of ``model`` whose ``teamName`` defaults to ``default_team``."""
    return create_model(
        model.__name__,
        __base__=model,
        team_name=(str, Field(default_team, alias="teamName", description="esa team name")),
    )


def validate_arguments(tool_name: str, model: type[ToolArguments], arguments: Optional[dict]) -> ToolArguments:
    """Validate raw tool arguments, raising ValidationError with one entry per bad field."""
    try:
        return model.model_validate(arguments or {})
    except PydanticValidationError as e:
        violations = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "arguments",
                "message": error["msg"],
            }
            for error in e.errors()
        ]
        raise ValidationError(tool_name, violations) from e
