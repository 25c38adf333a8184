"""Client interface strings."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

Locale = Literal["en", "zh"]


class Messages(BaseModel):
    """Every user-facing string of the comment widget."""

    model_config = ConfigDict(frozen=True)

    name_placeholder: str
    content_placeholder: str
    submit_label: str
    busy_label: str
    empty: str
    reply_label: str
    reply_placeholder: str
    cancel_label: str


MESSAGES: dict[str, Messages] = {
    "en": Messages(
        name_placeholder="Your name",
        content_placeholder="Leave a comment...",
        submit_label="Post",
        busy_label="...",
        empty="No comments yet. Be the first!",
        reply_label="Reply",
        reply_placeholder="Write a reply...",
        cancel_label="Cancel",
    ),
    "zh": Messages(
        name_placeholder="你的名字",
        content_placeholder="写下你的评论...",
        submit_label="发表评论",
        busy_label="...",
        empty="还没有评论，来做第一个吧！",
        reply_label="回复",
        reply_placeholder="写下你的回复...",
        cancel_label="取消",
    ),
}


def get_messages(locale: str) -> Messages:
    """Strings for a locale.

    Raises:
        ValueError: If the locale is not supported
    """
    try:
        return MESSAGES[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}")
