"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Client-supplied data was rejected.

    Spam-gate rejections use this class too, so callers see one shape.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NotAuthorizedError(DomainError):
    """Raised when a request lacks the pre-shared admin token."""

    def __init__(self, resource: str):
        super().__init__(f"Not authorized to read {resource}")


class VisitLogUnavailableError(DomainError):
    """Raised when the visit log is not bound or cannot be reached."""

    def __init__(self, reason: str = "KV not bound"):
        self.reason = reason
        super().__init__(reason)
