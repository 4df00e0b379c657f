"""
Security utilities: password hashing and verification.

PASSWORD HASHING (Argon2)
  - Passwords are never stored in plaintext
  - Argon2id is memory-hard and time-hard; every hash embeds its own
    random salt and cost parameters, so verification needs nothing but
    the stored string
  - We use passlib's CryptContext for safe, high-level Argon2 operations

There are no session tokens in this service: callers present their
credentials on every request and they are verified against the stored
hash each time (see app/dependencies.py).
"""

from passlib.context import CryptContext


# If we ever need to migrate from argon2 to a future scheme, passlib handles
# the transition automatically: old hashes are verified with the original
# scheme, and new passwords use the new one ("deprecated='auto'").
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Args:
        plain_password: The user's raw password input.

    Returns:
        An Argon2 hash string (e.g., "$argon2id$v=19$m=65536,t=3,p=4$...").
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored Argon2 hash.

    Args:
        plain_password: The password the caller just supplied.
        hashed_password: The hash stored in the database.

    Returns:
        True if the password matches, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)
