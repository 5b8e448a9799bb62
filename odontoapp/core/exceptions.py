"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """No signed-in account for an action that needs one."""

    def __init__(self, message: str = "Usuário não autenticado"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ValidationException(AppException):
    """Form rejected before any remote call."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class RemoteCallException(AppException):
    """A document store or identity provider call failed."""

    def __init__(self, message: str = "Remote service unavailable", operation: str | None = None):
        """Initialize with 502 status code and the failed operation name."""
        self.operation = operation
        super().__init__(message, status_code=502)


class AuthProviderException(AppException):
    """The identity provider rejected the credentials."""

    def __init__(self, message: str, code: str | None = None):
        """Initialize with 400 status code and the provider error code."""
        self.code = code
        super().__init__(message, status_code=400)
