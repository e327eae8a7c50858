from typing import Optional, Any


class FinanZasError(Exception):
    """
    Base exception for the FinanZas bot.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(FinanZasError):
    """
    Raised when user input fails validation.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)


class InvalidAmountError(ValidationError):
    """
    Raised when a transaction value is missing, not a number, or not positive.
    """
    def __init__(self, message: str = "Invalid amount", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "INVALID_AMOUNT"


class InvalidAccountIdError(ValidationError):
    """
    Raised when a link token does not look like a FinanZas user id.
    """
    def __init__(self, message: str = "Invalid account id", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "INVALID_ACCOUNT_ID"


class UnknownCommandError(ValidationError):
    def __init__(self, message: str = "Unknown command", details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.code = "UNKNOWN_COMMAND"
