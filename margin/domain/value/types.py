"""Domain value objects.

Text values are trimmed on construction and length-checked on the trimmed
result.
"""

from pydantic import field_validator

from margin.domain.value.common import RootValueObject

AUTHOR_NAME_MAX_LENGTH = 50
CONTENT_MAX_LENGTH = 2000


class PagePath(RootValueObject[str]):
    """Path of the page a comment belongs to, e.g. '/blog/post-1'."""

    @field_validator("root")
    @classmethod
    def validate_page_path(cls, v: str) -> str:
        """Validate the path is absolute."""
        if not v.startswith("/"):
            raise ValueError("page_path must start with /")
        return v


class AuthorName(RootValueObject[str]):
    """Free-text, unverified commenter name."""

    @field_validator("root")
    @classmethod
    def validate_author_name(cls, v: str) -> str:
        """Trim and validate length."""
        v = v.strip()
        if len(v) < 1 or len(v) > AUTHOR_NAME_MAX_LENGTH:
            raise ValueError(
                f"Author name must be 1-{AUTHOR_NAME_MAX_LENGTH} characters"
            )
        return v


class CommentText(RootValueObject[str]):
    """Comment body."""

    @field_validator("root")
    @classmethod
    def validate_comment_text(cls, v: str) -> str:
        """Trim and validate length."""
        v = v.strip()
        if len(v) < 1 or len(v) > CONTENT_MAX_LENGTH:
            raise ValueError(f"Content must be 1-{CONTENT_MAX_LENGTH} characters")
        return v
