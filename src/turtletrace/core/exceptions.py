"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than held."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient quantity of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class DuplicatePositionError(AppError):
    """Raised when opening a position for a symbol that is already tracked."""

    def __init__(self, symbol: str):
        super().__init__(
            f"{symbol} is already in position list",
            code="DUPLICATE_POSITION",
        )


class QuoteNotFoundError(AppError):
    """Raised when the quote source does not recognize a symbol."""

    def __init__(self, symbol: str):
        super().__init__(
            f"Symbol not recognized by quote source: {symbol}",
            code="QUOTE_NOT_FOUND",
        )


class DefaultAccountDeletionError(AppError):
    """Raised when attempting to delete the default account."""

    def __init__(self, account_id: str):
        super().__init__(
            f"Cannot delete default account: {account_id}",
            code="DEFAULT_ACCOUNT",
        )
