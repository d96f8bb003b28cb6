"""Password hashing utilities (bcrypt)."""

import bcrypt

from quill.config import AuthSettings


def hash_password(password: str, settings: AuthSettings) -> str:
    """Hash a plaintext password.

    Args:
        password: Plaintext password
        settings: Authentication settings (bcrypt work factor)

    Returns:
        bcrypt hash as a UTF-8 string
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash.

    Args:
        password: Plaintext password
        password_hash: Stored bcrypt hash

    Returns:
        True if the password matches
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
