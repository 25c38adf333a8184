"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StoreError(PersistenceError):
    """Document store call failed.

    Carries the store's own status code and response text so the gateway
    can pass them through instead of masking the failure.
    """

    def __init__(self, status_code: int, message: str, detail: str = ""):
        self.status_code = status_code
        self.message = message
        self.detail = detail
        super().__init__(f"{message} ({status_code}): {detail}")
