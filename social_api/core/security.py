# ============================================================================
# FILE: social_api/core/security.py
# ============================================================================
from datetime import datetime, timedelta
from typing import Optional
import logging

import bcrypt
from jose import JWTError, jwt

logger = logging.getLogger(__name__)

MIN_BCRYPT_ROUNDS = 10
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class InvalidTokenError(Exception):
    """Token is malformed, forged, expired or signed with another algorithm"""


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor"""

    def __init__(self, rounds: int = 12):
        if rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(f"bcrypt rounds must be >= {MIN_BCRYPT_ROUNDS}, got {rounds}")
        self.rounds = rounds

    @staticmethod
    def is_hash(value: str) -> bool:
        return bool(value) and value.startswith(BCRYPT_PREFIXES)

    def hash(self, password: str) -> str:
        secret = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def ensure_hash(self, value: str) -> str:
        """Hash value unless it already is a bcrypt hash (password update paths)"""
        if self.is_hash(value):
            return value
        return self.hash(value)

    def verify(self, password: str, hashed_password: str) -> bool:
        if not password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8")[:BCRYPT_MAX_BYTES],
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            return False


class TokenService:
    """Issues and verifies stateless JWT bearer tokens"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 15):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.utcnow()
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        claims = {"sub": str(user_id), "iat": now, "exp": expire}
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id carried by a valid token"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Token has no subject")
        return user_id
