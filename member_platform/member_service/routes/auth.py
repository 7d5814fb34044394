"""
Authentication router - registration and login.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..auth import TokenGuard
from ..credentials import login_user, register_user
from ..db import get_db
from ..dependencies import get_token_guard
from ..errors import AuthenticationError
from ..schemas import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserResponse
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    payload: RegisterRequest,
    request: Request,
    db: Session = Depends(get_db),
    guard: TokenGuard = Depends(get_token_guard),
):
    """Register a new user with email and password."""
    token, user = register_user(
        db,
        guard,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
    )
    log_auth_event("register_success", request, user=user)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    guard: TokenGuard = Depends(get_token_guard),
):
    """Login with email and password."""
    try:
        token, user = login_user(db, guard, email=payload.email, password=payload.password)
    except AuthenticationError:
        log_auth_event("login_failure", request, email=payload.email)
        raise

    log_auth_event("login_success", request, user=user)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))
