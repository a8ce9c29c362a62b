"""Password hashing for stored user credentials."""

import base64
import hashlib
import hmac
import logging
import secrets

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Hash and verify passwords with scrypt.

    Encoded hashes look like ``scrypt$<n>$<r>$<p>$<salt>$<hash>`` with the salt
    and hash in URL-safe base64, so parameters can change without breaking
    hashes that are already stored.
    """

    ALGORITHM = "scrypt"

    def __init__(self, n: int = 2**14, r: int = 8, p: int = 1, salt_bytes: int = 16, key_bytes: int = 32) -> None:
        if n < 2 or n & (n - 1):
            raise ValueError("n must be a power of two greater than 1")
        self.n = n
        self.r = r
        self.p = p
        self.salt_bytes = salt_bytes
        self.key_bytes = key_bytes

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        salt = secrets.token_bytes(self.salt_bytes)
        key = self._derive(password, salt, self.n, self.r, self.p, self.key_bytes)
        return "$".join(
            [
                self.ALGORITHM,
                str(self.n),
                str(self.r),
                str(self.p),
                base64.urlsafe_b64encode(salt).decode("ascii"),
                base64.urlsafe_b64encode(key).decode("ascii"),
            ]
        )

    def verify(self, password: str, encoded: str) -> bool:
        """Check a password against an encoded hash.

        Returns:
            True on match, False on mismatch or when the encoding is unreadable
        """
        try:
            algorithm, n, r, p, salt_b64, key_b64 = encoded.split("$")
            if algorithm != self.ALGORITHM:
                return False
            salt = base64.urlsafe_b64decode(salt_b64)
            expected = base64.urlsafe_b64decode(key_b64)
            actual = self._derive(password, salt, int(n), int(r), int(p), len(expected))
        except ValueError as e:
            logger.warning("Unreadable password hash: %s", e)
            return False
        return hmac.compare_digest(actual, expected)

    @staticmethod
    def _derive(password: str, salt: bytes, n: int, r: int, p: int, key_bytes: int) -> bytes:
        # OpenSSL's default 32 MiB cap is too small for n=2**15 and up
        maxmem = 256 * n * r * p
        return hashlib.scrypt(password.encode("utf-8"), salt=salt, n=n, r=r, p=p, maxmem=maxmem, dklen=key_bytes)
