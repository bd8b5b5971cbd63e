class GenerationError(Exception):
    """Base class for failures of a live generation attempt.

    The message is written for display: the service shows it to the user
    followed by a note that the offline sample is used instead.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(GenerationError):
    """The request could not be sent, or no response arrived before the deadline."""


class ServiceError(GenerationError):
    """The service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Gemini request failed ({status_code}).")
        self.status_code = status_code
        self.body = body


class MalformedResponse(GenerationError):
    """No JSON object could be isolated from the candidate text, or it did not parse."""


class IncompleteResponse(GenerationError):
    """The parsed JSON lacked one of the required note fields."""
