"""
Credential service: registration and login.

Both operations return ``(token, user)`` on success and raise a
``ServiceError`` subclass otherwise.
"""
from typing import Optional, Tuple
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .auth import (
    TokenGuard,
    generate_membership_id,
    hash_password,
    pwd_context,
    verify_password,
)
from .config import settings
from .crud import get_active_user_by_email
from .errors import AuthenticationError, ConflictError, InternalError, ValidationError
from .models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _require_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")


def register_user(
    db: Session,
    guard: TokenGuard,
    email: Optional[str],
    password: Optional[str],
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> Tuple[str, User]:
    """
    Create a new member account and issue its first token.

    Only email and password are mandatory; the name and phone fields may be
    left out and are stored as empty strings.

    Raises:
        ValidationError: Missing email/password or password too short
        ConflictError: An active user already uses this email
        InternalError: Hashing or persistence failed
    """
    _require_credentials(email, password)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    # Friendlier error for the common case; the unique index is the real guard
    if get_active_user_by_email(db, email):
        raise ConflictError("User with this email already exists")

    try:
        hashed_pw = hash_password(password)
    except Exception as e:
        logger.exception("Password hashing failed during registration")
        raise InternalError("Failed to hash password") from e

    new_user = User(
        email=email,
        password_hash=hashed_pw,
        first_name=first_name or "",
        last_name=last_name or "",
        phone=phone or "",
        membership_id=generate_membership_id(settings.MEMBERSHIP_ID_PREFIX),
        member_level=settings.DEFAULT_MEMBER_LEVEL,
        points=0,
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # A concurrent registration won the race for this email
        if get_active_user_by_email(db, email):
            raise ConflictError("User with this email already exists") from e
        logger.error("Constraint violation creating user email=%s: %s", email, e.orig)
        raise InternalError("Failed to create user") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create user email=%s", email)
        raise InternalError("Failed to create user") from e
    db.refresh(new_user)

    logger.info(
        "Registered user_id=%s membership_id=%s", new_user.id, new_user.membership_id
    )
    return guard.issue_token(new_user.id, new_user.email), new_user


def login_user(
    db: Session,
    guard: TokenGuard,
    email: Optional[str],
    password: Optional[str],
) -> Tuple[str, User]:
    """
    Check credentials and issue a token.

    An unknown email and a wrong password raise the same
    ``AuthenticationError`` so callers cannot tell them apart.
    """
    _require_credentials(email, password)

    user = get_active_user_by_email(db, email)
    if not user:
        # Spend the same hashing time as a real check
        pwd_context.dummy_verify()
        raise AuthenticationError("Invalid credentials")
    if not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    return guard.issue_token(user.id, user.email), user
