from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import secrets

import jwt
from passlib.context import CryptContext

from .config import settings
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.PASSWORD_HASH_ROUNDS,
)

MEMBERSHIP_ID_DIGITS = 5


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # passlib compares digests in constant time
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be identified")
        return False


def generate_membership_id(prefix: str = "LBK") -> str:
    """Return ``prefix`` followed by five random digits, e.g. ``LBK04217``."""
    return f"{prefix}{secrets.randbelow(10 ** MEMBERSHIP_ID_DIGITS):0{MEMBERSHIP_ID_DIGITS}d}"


@dataclass(frozen=True)
class Identity:
    """Verified identity claim carried by a bearer token."""
    user_id: int
    email: str


class TokenGuard:
    """
    Issues and validates signed bearer tokens.

    Built once at startup from configuration. The secret is kept private to
    the instance and never logged.

    Args:
        secret_key: HMAC signing secret
        algorithm: JWT signing algorithm
        lifetime: How long an issued token stays valid
        leeway: Clock-skew tolerance applied to expiry checks (zero = strict)
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=24),
        leeway: timedelta = timedelta(0),
    ):
        if not secret_key:
            raise ValueError("Token signing secret must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.leeway = leeway

    def __repr__(self):
        return f"<TokenGuard(algorithm={self.algorithm}, lifetime={self.lifetime})>"

    def issue_token(self, user_id: int, email: str, issued_at: Optional[datetime] = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def validate_token(self, token: str) -> Identity:
        """
        Verify signature, structure and expiry of ``token``.

        Raises:
            AuthenticationError: If the token is malformed, tampered with or expired
        """
        try:
            data = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["sub", "email", "iat", "exp"]},
            )
            return Identity(user_id=int(data["sub"]), email=data["email"])
        except (jwt.PyJWTError, ValueError) as exc:
            logger.info("Rejected bearer token: %s", exc.__class__.__name__)
            raise AuthenticationError("Invalid or expired token") from exc


def build_token_guard(app_settings=settings) -> TokenGuard:
    return TokenGuard(
        secret_key=app_settings.SECRET_KEY.get_secret_value(),
        algorithm=app_settings.JWT_ALGORITHM,
        lifetime=timedelta(hours=app_settings.TOKEN_EXPIRE_HOURS),
        leeway=timedelta(seconds=app_settings.TOKEN_LEEWAY_SECONDS),
    )
