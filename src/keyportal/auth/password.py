"""Password hashing utilities.

Learn: Passwords are stored as an unsalted SHA-256 hex digest. The same
password always produces the same hash, which is what login compares
against. There is no per-user salt and no key stretching.
"""

import hashlib
import secrets


def hash_password(password: str) -> str:
    """Return the SHA-256 hex digest of a password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored digest (constant-time compare)."""
    return secrets.compare_digest(hash_password(password), password_hash)
