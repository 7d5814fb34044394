"""
Profile and membership operations for an authenticated user.
"""
from typing import Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .crud import get_active_user
from .errors import InternalError, NotFoundError
from .models import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "phone")


def get_profile(db: Session, user_id: int) -> User:
    user = get_active_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def update_profile(
    db: Session,
    user_id: int,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> User:
    """
    Apply the supplied profile fields.

    Empty strings count as "not supplied", so a field can be changed but
    never cleared through this operation.
    """
    user = get_profile(db, user_id)

    changes = {"first_name": first_name, "last_name": last_name, "phone": phone}
    for field in UPDATABLE_FIELDS:
        value = changes[field]
        if value:
            setattr(user, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to update profile user_id=%s", user_id)
        raise InternalError("Failed to update profile") from e
    db.refresh(user)
    return user


def format_member_since(created_at) -> str:
    """Format a date as day/month/year without zero padding, e.g. ``5/3/2024``."""
    return f"{created_at.day}/{created_at.month}/{created_at.year}"


def get_membership(db: Session, user_id: int) -> dict:
    user = get_profile(db, user_id)
    return {
        "membership_id": user.membership_id,
        "member_level": user.member_level,
        "points": user.points,
        "member_since": format_member_since(user.created_at),
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
    }
