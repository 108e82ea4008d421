"""Errors raised by the connection layer."""

from typing import Optional


class BackendError(Exception):
    """
    Base class for failed upstream calls.

    Attributes:
        status: Upstream status code, or None when no response was obtained
        message: Human readable failure description
        request: The query document or REST path that was sent
        cause: Underlying exception, if any
    """

    def __init__(
        self,
        message: Optional[str] = None,
        status: Optional[int] = None,
        request: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message or (str(cause) if cause else "backend request failed"))
        self.status = status
        self.message = message
        self.request = request
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"


class UpstreamRequestError(BackendError):
    """The upstream answered with an ``errors`` payload or an error status."""


class TransportError(BackendError):
    """The call failed before a structured upstream answer was available."""

    def __init__(self, cause: BaseException, request: Optional[str] = None):
        super().__init__(message=str(cause) or type(cause).__name__, request=request, cause=cause)
