"""
User lookups. Every query goes through ``active_users`` so soft-deleted rows
are never returned.
"""
from typing import Optional
from sqlalchemy.orm import Session, Query

from .models import User


def active_users(db: Session) -> Query:
    return db.query(User).filter(User.deleted_at.is_(None))


def get_active_user(db: Session, user_id: int) -> Optional[User]:
    return active_users(db).filter(User.id == user_id).first()


def get_active_user_by_email(db: Session, email: str) -> Optional[User]:
    return active_users(db).filter(User.email == email).first()
