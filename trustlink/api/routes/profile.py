"""Profile of the authenticated caller."""

from fastapi import APIRouter

from trustlink.api.dependencies import ProfileServiceDep
from trustlink.api.exceptions import ResourceNotFoundError
from trustlink.api.middleware.auth import IdentityDep
from trustlink.profile.models import Profile, ProfileUpdate
from trustlink.profile.service import ProfileNotFoundError

router = APIRouter(prefix="/profile")


@router.get("/me", response_model=Profile, response_model_exclude_none=True)
async def get_my_profile(identity: IdentityDep, profiles: ProfileServiceDep) -> Profile:
    """Return the caller's profile, creating it from token claims on first access."""
    return await profiles.get_or_create(identity)


@router.patch("/me", response_model=Profile, response_model_exclude_none=True)
async def update_my_profile(
    body: ProfileUpdate,
    identity: IdentityDep,
    profiles: ProfileServiceDep,
) -> Profile:
    try:
        return await profiles.update(identity.uid, body)
    except ProfileNotFoundError as e:
        raise ResourceNotFoundError("Profile not found") from e
