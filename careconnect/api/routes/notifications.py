from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends

from careconnect.api.deps import get_current_user, get_service
from careconnect.core.care_service import CareService
from careconnect.data.models import User

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [asdict(n) for n in service.list_notifications(user)]


@router.put("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    return asdict(service.mark_notification_read(user, notification_id))
