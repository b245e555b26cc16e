"""
Collab client error classes

Errors are not raised by the API operations. Instead, they are stored in
the ``error`` attribute of the response metadata returned alongside every
result, so that callers can decide how to escalate them. Callers preferring
exceptions may use ``Response.raise_for_error`` to raise the stored error.
"""

from typing import Optional

from .schemas import AppError


CONNECTING_ERROR_ID = "model.client.connecting.app_error"
DECODING_ERROR_ID = "model.client.decoding.app_error"


class ClientError(Exception):
    """
    Base class for any kind of failed API operation

    The attribute `id` is a stable identifier that should be used to branch
    behavior, while `message` and `detail` are meant for humans only.
    """

    def __init__(
            self,
            error_id: str,
            message: str,
            detail: str = "",
            status_code: Optional[int] = None,
            cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.id = error_id
        self.message = message
        self.detail = detail
        self.status_code = status_code
        self.cause = cause

    def __str__(self) -> str:
        if self.detail:
            return f"{self.id}: {self.message} ({self.detail})"
        return f"{self.id}: {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, status_code={self.status_code!r})"


class TransportError(ClientError):
    """
    Error when the request didn't reach the server or no response was received

    Examples are DNS failures, refused connections or timeouts. There's no
    status code available for this kind of error, it's always ``None``.
    """

    def __init__(self, path: str, cause: BaseException):
        super().__init__(
            CONNECTING_ERROR_ID,
            f"We encountered an error while connecting to the server for {path!r}",
            detail=str(cause),
            cause=cause
        )
        self.path = path


class ApplicationError(ClientError):
    """
    Error when the server answered with a failure status code and an error envelope
    """

    def __init__(self, app_error: AppError, status_code: int):
        super().__init__(
            app_error.id,
            app_error.message,
            detail=app_error.detailed_error,
            status_code=status_code
        )
        self.app_error = app_error
        self.request_id = app_error.request_id

    @property
    def is_bad_request(self) -> bool:
        return self.status_code == 400

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DecodeAmbiguityError(ClientError):
    """
    Error when a successful response carried a body not matching the expected shape

    The result of the operation is ``None`` in this case. Clients with lenient
    decoding (the default) only attach this error as ``decode_error`` to the
    response metadata, clients with strict decoding also use it as ``error``.
    """

    def __init__(self, path: str, expected: str, status_code: int, cause: Optional[BaseException] = None):
        super().__init__(
            DECODING_ERROR_ID,
            f"The response for {path!r} could not be decoded as {expected}",
            detail=str(cause) if cause is not None else "",
            status_code=status_code,
            cause=cause
        )
        self.path = path
        self.expected = expected
