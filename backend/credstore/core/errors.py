"""
Custom exceptions for the credential store
"""


class CredstoreError(Exception):
    """Base exception for credential store failures"""

    code = "CREDSTORE_ERROR"
    default_message = "Credential store error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Validation errors

class ValidationError(CredstoreError):
    """Raised when username or password input is rejected"""
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class InvalidUsernameError(ValidationError):
    """Raised when a username does not match the allowed format"""
    code = "INVALID_USERNAME"
    default_message = (
        "Username must be 3-20 characters long and contain only "
        "letters, numbers, and underscores"
    )


class WeakPasswordError(ValidationError):
    """Raised when a password does not meet the strength policy"""
    code = "WEAK_PASSWORD"
    default_message = (
        "Password must be at least 8 characters long with at least one "
        "letter, one number, and one special character"
    )


class PasswordMismatchError(ValidationError):
    """Raised when password and confirmation differ"""
    code = "PASSWORD_MISMATCH"
    default_message = "Passwords do not match"


# Authentication errors

class AuthError(CredstoreError):
    """Raised when a login attempt is refused"""
    code = "AUTH_ERROR"
    default_message = "Authentication failed"


class UnknownUserError(AuthError):
    """Raised when no account exists for the given username"""
    code = "UNKNOWN_USER"
    default_message = "Username not found"


class InvalidCredentialsError(AuthError):
    """Raised when the password does not verify"""
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid password"


class AccountDisabledError(AuthError):
    """Raised when the account exists but is inactive"""
    code = "ACCOUNT_DISABLED"
    default_message = "Account is disabled"


# Storage errors

class StoreError(CredstoreError):
    """Raised by the account store"""
    code = "STORE_ERROR"
    default_message = "Account store error"


class DuplicateUsernameError(StoreError):
    """Raised when the username is already registered"""
    code = "DUPLICATE_USERNAME"

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username '{username}' already exists")


class StoreUnavailableError(StoreError):
    """Raised when the registry database cannot be reached or is busy"""
    code = "STORE_UNAVAILABLE"
    default_message = "Account store unavailable"


class CorruptRecordError(StoreError):
    """Raised when a stored account row cannot be decoded"""
    code = "CORRUPT_RECORD"
    default_message = "Stored account record is corrupt"


class AccountNotFoundError(StoreError):
    """Raised when an update targets an account id that does not exist"""
    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account with ID {account_id} not found")
