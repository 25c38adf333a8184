"""Comment client."""

from .backend import BackendError, CommentBackend, GatewayCommentBackend, StoreCommentBackend
from .comments import NAME_KEY, CommentClient
from .factory import create_comment_client, create_visit_tracker
from .forms import CommentForm, ReplyForm
from .i18n import MESSAGES, Messages, get_messages
from .storage import FileStorage, MemoryStorage, Storage
from .thread import ThreadEntry, build_thread, sort_comments
from .tracker import VisitTracker

__all__ = [
    "BackendError",
    "CommentBackend",
    "GatewayCommentBackend",
    "StoreCommentBackend",
    "CommentClient",
    "NAME_KEY",
    "create_comment_client",
    "create_visit_tracker",
    "CommentForm",
    "ReplyForm",
    "MESSAGES",
    "Messages",
    "get_messages",
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "ThreadEntry",
    "build_thread",
    "sort_comments",
    "VisitTracker",
]
