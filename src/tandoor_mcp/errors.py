"""Exceptions raised by the Tandoor client and tool handlers."""


class ToolInputError(Exception):
    """Raised when tool arguments are missing, malformed, or reference nothing.

    Reported to the caller as an invalid-argument error.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ReferenceNotFoundError(ToolInputError):
    """Raised when a name search against Tandoor returns no matches."""

    def __init__(self, label: str, name: str):
        super().__init__(f'{label} named "{name}" not found.')
        self.label = label
        self.name = name


class TandoorAPIError(Exception):
    """Raised when a call to the Tandoor API fails.

    Attributes:
        message: human-readable summary of the failure
        status_code: HTTP status returned by Tandoor, None for network failures
        body: raw response body, verbatim, if any was received
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    @property
    def response_detail(self) -> str:
        """Raw response body, or a placeholder when nothing came back."""
        return self.body if self.body else "No response data"

    def __str__(self) -> str:
        return self.message


class ToolExecutionError(Exception):
    """Raised when a tool cannot produce any result for reasons other than input.

    Reported to the caller as an internal error, message verbatim.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
