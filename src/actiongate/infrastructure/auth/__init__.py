"""Authentication adapters."""

from actiongate.infrastructure.auth.passwords import PasswordHasher
from actiongate.infrastructure.auth.token_service import IssuedToken, TokenService

__all__ = ["IssuedToken", "PasswordHasher", "TokenService"]
