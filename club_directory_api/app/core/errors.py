"""
Client error types raised by the member services.

Both errors are request‑level: the API layer turns them into 4xx
plain‑text responses and the process keeps serving.  ``message`` is
the exact text sent back to the client.
"""


class MemberError(Exception):
    """Base class for errors caused by a client request."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MemberError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(MemberError):
    """The request targets a member id that is not in the collection."""

    status_code = 404


class IdGenerationError(RuntimeError):
    """The id generator kept returning ids the store has already issued.

    Not a client error: the API lets it surface as a 500.
    """
