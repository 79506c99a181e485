"""One-way hash of a bearer secret."""

import hashlib
import hmac
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenHash:
    """SHA-256 hex digest of a bearer secret (64 lowercase hex chars)."""

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 64:
            raise ValueError("SHA-256 hex digest must be 64 characters")
        try:
            int(self.value, 16)
        except ValueError:
            raise ValueError("Token hash must be hexadecimal") from None

    @classmethod
    def of(cls, secret: str) -> "TokenHash":
        """Hash a presented secret."""
        return cls(hashlib.sha256(secret.encode("utf-8")).hexdigest())

    def matches(self, other: str) -> bool:
        """Constant-time comparison against a stored digest."""
        return hmac.compare_digest(self.value, other)
