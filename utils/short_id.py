import secrets
import string

def generate_short_id(length: int = 10) -> str:
    """
    Generate a cryptographically secure alphanumeric ID using lowercase letters and digits.

    Args:
        length: Length of the ID to generate (default: 10). Account ids use 28.

    Returns:
        String containing random a-z0-9 characters

    Example:
        generate_short_id() -> "k3m9x7q2w5"
    """
    characters = string.ascii_lowercase + string.digits  # a-z0-9
    return ''.join(secrets.choice(characters) for _ in range(length))


def generate_verification_code() -> str:
    """Six-digit numeric code, uniform over 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def generate_unrecoverable_password(nbytes: int = 32) -> str:
    """Random secret for accounts created without a password; nobody is ever told it."""
    return secrets.token_urlsafe(nbytes)
