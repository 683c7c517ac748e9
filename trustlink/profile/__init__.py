"""User profiles."""

from trustlink.profile.models import Profile, ProfileUpdate
from trustlink.profile.service import ProfileNotFoundError, ProfileService

__all__ = ["Profile", "ProfileNotFoundError", "ProfileService", "ProfileUpdate"]
