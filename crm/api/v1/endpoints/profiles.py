"""
Profile Endpoints Module

User profiles hold the application role for each identity. Anyone can read
their own profile; reading others, listing and writing are admin-only.
"""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException
from crm.api import deps
from crm.auth.profiles import ProfileResolver
from crm.core.exceptions import ProfileNotFound
from crm.schemas.session import SessionUser
from crm.schemas.user import UserProfileRead, UserProfileUpdate

router = APIRouter()


@router.get("", response_model=List[UserProfileRead])
def list_profiles(
    resolver: ProfileResolver = Depends(deps.get_profile_resolver),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    return resolver.list_profiles()


@router.get("/{uid}", response_model=UserProfileRead)
def read_profile(
    uid: str,
    resolver: ProfileResolver = Depends(deps.get_profile_resolver),
    current_user: SessionUser = Depends(deps.get_current_user),
) -> Any:
    """
    Raises:
        HTTPException 403: If reading someone else's profile without an admin role
        HTTPException 404: If no profile exists for the uid
    """
    if uid != current_user.uid and not current_user.is_privileged:
        raise HTTPException(status_code=403, detail="The user doesn't have enough privileges")
    try:
        return resolver.get_profile(uid)
    except ProfileNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")


@router.put("/{uid}", response_model=UserProfileRead)
def update_profile(
    uid: str,
    profile_in: UserProfileUpdate,
    resolver: ProfileResolver = Depends(deps.get_profile_resolver),
    current_user: SessionUser = Depends(deps.get_current_admin),
) -> Any:
    """
    Merge fields into a profile, creating it when absent. This is how roles are granted.

    Raises:
        HTTPException 400: If email or role is sent as null, or when creating
            a profile without an email and a role
    """
    update_data = profile_in.model_dump(mode="json", exclude_unset=True)
    # A profile must always keep an email and a role
    cleared = [field for field in ("email", "role") if field in update_data and update_data[field] is None]
    if cleared:
        raise HTTPException(status_code=400, detail=f"{', '.join(cleared)} cannot be null")
    try:
        resolver.get_profile(uid)
    except ProfileNotFound:
        if not update_data.get("email") or not update_data.get("role"):
            raise HTTPException(status_code=400, detail="A new profile needs an email and a role")
    return resolver.update_profile(uid, update_data)
