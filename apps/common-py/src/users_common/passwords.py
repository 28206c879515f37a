"""Password hashing helpers."""

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plaintext password with a fresh bcrypt salt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor (4..31)

    Returns:
        The encoded hash, safe to persist
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
