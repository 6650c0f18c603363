"""
Username and password policy checks
"""

import re
import string

from .errors import InvalidUsernameError, WeakPasswordError, PasswordMismatchError


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8

USERNAME_PATTERN = re.compile(
    rf"[A-Za-z0-9_]{{{USERNAME_MIN_LENGTH},{USERNAME_MAX_LENGTH}}}"
)


def _is_symbol(char: str) -> bool:
    return char.isprintable() and not char.isalnum() and not char.isspace()


def validate_username(candidate: str) -> None:
    """Raise InvalidUsernameError unless the username is 3-20 chars of [A-Za-z0-9_]"""
    if not isinstance(candidate, str) or not USERNAME_PATTERN.fullmatch(candidate):
        raise InvalidUsernameError()


def validate_password(candidate: str) -> None:
    """Raise WeakPasswordError unless the password has 8+ chars with an ASCII letter, ASCII digit and symbol"""
    if not isinstance(candidate, str) or len(candidate) < PASSWORD_MIN_LENGTH:
        raise WeakPasswordError()

    try:
        candidate.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates cannot be stored or verified
        raise WeakPasswordError()

    has_letter = any(c in string.ascii_letters for c in candidate)
    has_digit = any(c in string.digits for c in candidate)
    has_symbol = any(_is_symbol(c) for c in candidate)

    if not (has_letter and has_digit and has_symbol):
        raise WeakPasswordError()


def validate_registration(username: str, password: str, confirmation: str) -> None:
    """Run the registration checks in order: username, confirmation, password strength"""
    validate_username(username)
    if password != confirmation:
        raise PasswordMismatchError()
    validate_password(password)


def username_requirements() -> str:
    return (
        f"{USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters, "
        "alphanumeric and underscore only"
    )


def password_requirements() -> str:
    return (
        f"minimum {PASSWORD_MIN_LENGTH} characters with letter, number, "
        "and special character"
    )
