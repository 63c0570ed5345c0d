"""Password hashing and verification service."""

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

password_hash = PasswordHash.recommended()

# Real argon2 hash: pwdlib raises UnknownHashError for malformed strings.
DUMMY_HASH = password_hash.hash("dummy_password_for_timing_attack_prevention")


class PasswordService:
    """Peppered argon2 hashing backed by pwdlib."""

    def __init__(self, pepper: str = "") -> None:
        self.pepper = pepper

    def hash_password(self, plain_password: str) -> str:
        """Hash a plain password for storage with pepper."""
        return password_hash.hash(plain_password + self.pepper)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against a stored hash."""
        try:
            return password_hash.verify(plain_password + self.pepper, hashed_password)
        except UnknownHashError:
            return False

    def get_dummy_hash(self) -> str:
        """Get a dummy hash for timing attack prevention."""
        return DUMMY_HASH
