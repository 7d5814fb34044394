"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
import sys
import logging
import os

from ..models import User

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "login_success",
    "login_failure",
}


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure stdout logging, plus a file handler when ``log_dir`` is set.

    Args:
        level: Root log level name
        log_dir: Directory for ``member_service.log`` (optional)
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "member_service.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers
    )


def client_ip(request: Request) -> Optional[str]:
    """Extract the client IP, falling back to the first X-Forwarded-For entry."""
    if request.client:
        return request.client.host

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return None


def log_auth_event(
    event_type: str,
    request: Request,
    user: Optional[User] = None,
    email: Optional[str] = None,
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: register_success, login_success, login_failure
        request: FastAPI Request object
        user: The user involved, when one was resolved
        email: Email supplied by the caller (used when ``user`` is None)

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "AUTH %s user_id=%s email=%s ip=%s user_agent=%s timestamp=%s",
        event_type,
        user.id if user else None,
        user.email if user else email,
        client_ip(request),
        request.headers.get("user-agent"),
        datetime.now(timezone.utc).isoformat()
    )
