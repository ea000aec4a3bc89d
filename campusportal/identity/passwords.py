"""
Name: Password Hasher

Responsibilities:
  - Derive a fixed-length key from (password, salt) with PBKDF2-HMAC-SHA512
  - Generate fresh per-credential salts from a CSPRNG
  - Compare derived keys in constant time

Collaborators:
  - identity/authentication.py: verifies login attempts
  - application/usecases/change_password.py: verifies and rotates credentials
  - scripts/create_user.py: provisions accounts

Constraints:
  - Deterministic for a given (password, salt)
  - Salt is never reused across users or rotations
  - Integration failures surface as ConfigurationFatal, never as False

Notes:
  - 10,000 rounds / 64-byte key / 64-byte salt keep existing hashes valid
"""

import hashlib
import hmac
import secrets

from ..crosscutting.exceptions import ConfigurationFatal

DIGEST = "sha512"
KEY_BYTES = 64
SALT_BYTES = 64
ITERATIONS = 10_000


def generate_salt(length: int = SALT_BYTES) -> bytes:
    """R: Fresh random salt from the OS CSPRNG."""
    return secrets.token_bytes(length)


def derive(password: str, salt: bytes, iterations: int = ITERATIONS) -> bytes:
    """
    R: Derive the stored password key.

    Raises:
        ConfigurationFatal: If the KDF primitive is unavailable
    """
    try:
        return hashlib.pbkdf2_hmac(
            DIGEST,
            password.encode("utf-8"),
            salt,
            iterations,
            dklen=KEY_BYTES,
        )
    except ValueError as exc:
        raise ConfigurationFatal(
            f"Password KDF unavailable ({DIGEST})", original_error=exc
        ) from exc


class PasswordHasher:
    """
    R: Facade over derive/generate_salt pinned to the stored-credential format.

    Stored rows carry only (salt, hash), so the round count is fixed at
    ITERATIONS for every credential the portal writes or checks.
    """

    iterations = ITERATIONS

    def derive(self, password: str, salt: bytes) -> bytes:
        return derive(password, salt, self.iterations)

    def verify(self, password: str, salt: bytes, expected: bytes) -> bool:
        """R: Byte-exact, constant-time comparison against a stored key."""
        return hmac.compare_digest(self.derive(password, salt), expected)

    def new_credentials(self, password: str) -> tuple[bytes, bytes]:
        """R: Return a fresh (salt, password_hash) pair."""
        salt = generate_salt()
        return salt, self.derive(password, salt)
