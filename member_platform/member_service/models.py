from sqlalchemy import Column, Integer, String, DateTime, Index, text
from datetime import datetime, timezone
from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    # Soft-delete marker, NULL while the account is active
    deleted_at = Column(DateTime, nullable=True, index=True)

    email = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, default="", nullable=False)
    last_name = Column(String, default="", nullable=False)
    phone = Column(String, default="", nullable=False)

    # Loyalty membership
    membership_id = Column(String, unique=True, index=True, nullable=False)
    member_level = Column(String, default="Gold", nullable=False)
    points = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        # Email is unique among active rows only
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
        # Never hand out a rowid that was used before
        {"sqlite_autoincrement": True},
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, membership_id={self.membership_id})>"
