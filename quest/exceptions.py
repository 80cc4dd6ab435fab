"""Public exceptions for quest."""


class QuestError(Exception):
    """Base exception for all quest errors."""


class QuestEncodingError(QuestError):
    """Request parameters could not be marshaled into a body."""


class QuestTransportError(QuestError):
    """The HTTP client failed to send the request or receive the response."""


class QuestDecodingError(QuestError):
    """Response body could not be decoded as a JSON object."""


class QuestValidationError(QuestError):
    """Response status code was not in the accepted set."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
