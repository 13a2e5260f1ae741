"""Exceptions raised by the Live client."""


class LiveError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(LiveError, ValueError):
    """A required argument was missing or invalid; no request was sent."""


class ResponseDecodeError(LiveError):
    """
    The API returned a body that could not be decoded.

    ``status_code`` is the HTTP status of the reply, or 0 when the body was
    decoded outside of a request.
    """

    def __init__(self, message: str, body: str = "", status_code: int = 0):
        super().__init__(message)
        self.body = body
        self.status_code = status_code
