"""
User endpoints.

Only the profile route exists.  The caller is identified by the
profile credential resolver, which is the stub from
``KNOWN_DEFECT_AUTH_BYPASS`` until that defect is hotfixed.
"""

from fastapi import APIRouter, Depends

from taskmaster_api.app.api.deps import get_user_service
from taskmaster_api.app.core.security import get_current_user_id
from taskmaster_api.app.schemas.user import UserEnvelope, UserRead
from taskmaster_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/profile", response_model=UserEnvelope)
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Return the public view (id and username) of the calling user."""
    user = await service.get_profile(user_id)
    return UserEnvelope(user=UserRead.model_validate(user))
