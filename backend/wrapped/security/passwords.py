"""
Wrapped Backend - Password Hashing
====================================

What:  Salted adaptive hashing of user passwords with bcrypt.
How:   `hash_password` / `verify_password` are blocking (bcrypt is CPU-bound
       by design), so AuthService runs them in Starlette's threadpool.

bcrypt only reads the first 72 bytes of its input and recent releases raise
on longer values, so both functions truncate to 72 bytes explicitly.
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a plaintext password.

    Args:
        password: Plaintext password
        rounds:   bcrypt cost factor (log2 of the iteration count)

    Returns:
        The modular-crypt hash string ("$2b$10$...") to store.
    """
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """True if `password` matches the stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except ValueError:
        return False
