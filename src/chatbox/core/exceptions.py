"""Custom exceptions for the application."""


class ChatboxException(Exception):
    """Base exception for all Chatbox errors."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


# Authentication Exceptions
class InvalidCredentialsError(ChatboxException):
    """Invalid email or password."""
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, status_code=401)


class UnauthenticatedError(ChatboxException):
    """Missing, malformed, expired or forged session token."""
    def __init__(self, message: str = "User not authorized"):
        super().__init__(message, status_code=403)


class ForbiddenError(ChatboxException):
    """Authenticated, but the role does not allow the operation."""
    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, status_code=403)


# Account Exceptions
class EmailAlreadyExistsError(ChatboxException):
    """Email already registered."""
    def __init__(self, message: str = "User already exists with this email."):
        super().__init__(message, status_code=400)


class AccountNotFoundError(ChatboxException):
    """No account with the given identifier."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message, status_code=404)


# External Exceptions
class UpstreamError(ChatboxException):
    """Completion API failure."""
    def __init__(self, message: str = "Upstream service error"):
        super().__init__(message, status_code=500)
