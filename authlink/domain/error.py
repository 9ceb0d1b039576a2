"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthenticationError(DomainError):
    """Base error for a failed sign-in attempt."""

    pass


class AccountNotFoundError(AuthenticationError):
    """No account matches the supplied email or username."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Email {identifier} not found.")


class InvalidCredentialsError(AuthenticationError):
    """Password does not match the stored hash."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class PersistenceError(DomainError):
    """A repository lookup or write failed.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Persistence failure during {operation}: {cause}")
