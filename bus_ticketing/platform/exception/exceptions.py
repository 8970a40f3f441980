class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class EmptyPayloadError(DomainError):
    def __init__(self, message: str = 'payload is required') -> None:
        super().__init__(message)


class InvalidStatusError(DomainError):
    def __init__(self, message: str = 'invalid booking status') -> None:
        super().__init__(message)


class InvalidEventSourceError(DomainError):
    def __init__(
        self, message: str = 'invalid booking event source [valid: CONFIRMED, CANCELLED]'
    ) -> None:
        super().__init__(message)


class IllegalReconfirmationError(DomainError):
    def __init__(
        self, message: str = 'this booking has been cancelled and cannot be re-confirmed'
    ) -> None:
        super().__init__(message)


class MissingCancellationFieldsError(DomainError):
    def __init__(self, *, missing: list[str] | None = None) -> None:
        self.missing = missing or []
        if self.missing:
            names = ', '.join(f"'{name}'" for name in self.missing)
            message = f'object has missing required properties: [{names}]'
        else:
            message = "'cancelled' fields are not set in the payload"
        super().__init__(message)
