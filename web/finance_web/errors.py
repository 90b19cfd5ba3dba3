"""Failure taxonomy shared by the backend client, services and routers."""


class ClientError(Exception):
    """Base class for failures raised by the web client."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkFailure(ClientError):
    """The request to the backend could not be completed."""


class AuthFailure(ClientError):
    """The backend answered 401, or the session token is invalid or expired."""


class ParseFailure(ClientError):
    """The backend body was not JSON or did not have the expected shape."""


class ValidationFailure(ClientError):
    """User input was rejected before any network call was made."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class BackendRejected(ClientError):
    """The backend answered with a non-success status other than 401."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
