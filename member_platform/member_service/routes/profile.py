"""
Profile router - the authenticated user's own record and membership card.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import Identity
from ..db import get_db
from ..dependencies import get_current_identity
from ..profile import get_membership, get_profile, update_profile
from ..schemas import ErrorResponse, MembershipResponse, ProfileResponse, UpdateProfileRequest, UserResponse

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.get("", response_model=ProfileResponse)
def read_profile(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Get current user's profile information."""
    return ProfileResponse(user=UserResponse.model_validate(get_profile(db, identity.user_id)))


@router.put(
    "",
    response_model=ProfileResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def edit_profile(
    payload: UpdateProfileRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Update current user's profile information.

    Only non-empty first_name, last_name and phone values are applied.
    """
    user = update_profile(
        db,
        identity.user_id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        phone=payload.phone,
    )
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.get("/membership", response_model=MembershipResponse)
def read_membership(identity: Identity = Depends(get_current_identity), db: Session = Depends(get_db)):
    """Get current user's membership details including points and level."""
    return get_membership(db, identity.user_id)
