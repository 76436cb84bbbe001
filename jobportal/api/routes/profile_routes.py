"""
Profile Routes

GET  /profiles/me        - Merged base + role-specific profile
PUT  /profiles/me        - Update any profile fields (routed per table)
POST /profiles/me/avatar - Upload avatar image
GET  /profiles/{user_id} - Public view of another user's profile
"""

from typing import Dict, Any

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Body

from jobportal.core.auth import get_current_user
from jobportal.db.database import fetch_one
from jobportal.services.profile_service import get_full_profile, update_full_profile, profile_completion
from jobportal.services.storage_service import get_storage_service
from jobportal.utils.file_upload import read_upload, AVATAR_EXTENSIONS

router = APIRouter(prefix="/profiles", tags=["Profiles"])

# Hidden from other users
PRIVATE_FIELDS = {"phone", "email"}


@router.get("/me")
async def get_my_profile(user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    """Complete profile with a completion percentage."""
    try:
        profile = get_full_profile(user["user_id"], user["role"])
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    profile["role"] = user["role"]
    profile["profile_completion"] = profile_completion(user["role"], profile)
    return profile


@router.put("/me")
async def update_my_profile(
    data: Dict[str, Any] = Body(..., examples=[{"full_name": "Rahul Sharma", "department": "Computer Science"}]),
    user: dict = Depends(get_current_user)
) -> Dict[str, Any]:
    """
    Update profile fields. Send a flat object; shared fields go to the base
    profile, the rest to the role's own profile table.
    """
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")

    try:
        return update_full_profile(user["user_id"], user["role"], data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/me/avatar")
async def upload_avatar(
    file: UploadFile = File(..., description="PNG, JPG or WEBP image"),
    user: dict = Depends(get_current_user)
) -> Dict[str, Any]:
    """Store the avatar in the avatars bucket and link it on the profile."""
    content, ext, content_type = await read_upload(file, AVATAR_EXTENSIONS)
    url = get_storage_service().upload_file("avatars", f"{user['user_id']}/avatar{ext}", content, content_type)
    update_full_profile(user["user_id"], user["role"], {"avatar_url": url})
    return {"avatar_url": url}


@router.get("/{user_id}")
async def get_user_profile(user_id: int, user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    """Another user's profile without contact details."""
    row = fetch_one("SELECT role, is_active FROM users WHERE user_id = :id", {"id": user_id})
    if not row or not row["is_active"]:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        profile = get_full_profile(user_id, row["role"])
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    profile = {k: v for k, v in profile.items() if k not in PRIVATE_FIELDS}
    profile["role"] = row["role"]
    return profile
