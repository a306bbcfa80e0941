"""
Security utilities for bearer token validation.
Decodes caller JWTs and exposes the account id carried in the ``sub`` claim.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from ..config.settings import Settings, get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIFETIME = timedelta(minutes=30)


class SecurityManager:
    """
    Centralized JWT handling for the API.
    Tokens are signed with the configured secret and algorithm.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.JWT_SECRET_KEY

    def create_access_token(
        self,
        subject: str,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create a signed access token for an account.

        Args:
            subject: Account id placed in the ``sub`` claim
            expires_delta: Custom lifetime
            extra_claims: Additional payload entries

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        to_encode = dict(extra_claims or {})
        to_encode.update({
            "sub": str(subject),
            "iat": now,
            "exp": now + (expires_delta or DEFAULT_TOKEN_LIFETIME),
            "type": "access",
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Returns:
            dict: Decoded token payload

        Raises:
            AuthenticationError: If the token is invalid, expired or has no subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise AuthenticationError("Token expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if not payload.get("sub"):
            logger.warning("Token missing subject (user_id)")
            raise AuthenticationError("Could not validate credentials")

        return payload

    def get_subject(self, token: str) -> str:
        return str(self.verify_token(token)["sub"])


@lru_cache()
def get_security_manager() -> SecurityManager:
    return SecurityManager()


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create access token with the cached security manager."""
    return get_security_manager().create_access_token(subject, expires_delta)


def verify_token(token: str) -> Dict[str, Any]:
    """Verify token with the cached security manager."""
    return get_security_manager().verify_token(token)
