from __future__ import annotations

from fastapi import APIRouter, Depends

from careconnect.api.deps import get_current_user, get_service
from careconnect.api.schemas import UserCreate
from careconnect.api.views import user_view
from careconnect.core.care_service import CareService
from careconnect.data.models import User

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", status_code=201)
async def register_user(
    body: UserCreate,
    service: CareService = Depends(get_service),
) -> dict:
    user = service.register_user(
        username=body.username,
        email=body.email,
        full_name=body.full_name,
        role=body.role,
        phone=body.phone,
        profile=body.profile.model_dump() if body.profile else None,
    )
    return user_view(user)


@router.get("/user")
async def current_user(user: User = Depends(get_current_user)) -> dict:
    return user_view(user)
