"""Errors raised when talking to the remote store."""


class ApiError(Exception):
    """A failed request to the remote API.

    ``status_code`` is the HTTP status when the server answered, and ``errors``
    carries any per-field messages the API returned.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    @property
    def retryable(self) -> bool:
        """Server errors and network failures may succeed on retry; 4xx won't."""
        if self.status_code is None:
            return True
        return self.status_code >= 500
