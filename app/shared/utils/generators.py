"""ID and secret generators (CUID2 ids, initial passwords)."""

import secrets
import string

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2) for primary keys."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_password(length: int = 16) -> str:
    """Return a random password from letters, digits and symbols (secrets module)."""
    if length < 8:
        raise ValueError("Password length must be at least 8")
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))
