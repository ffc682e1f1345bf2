from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from careconnect.api.deps import get_service, match_preferences, require_role
from careconnect.api.schemas import ProfileFields, ProfileUpdate
from careconnect.api.views import caretaker_view
from careconnect.core.care_service import CareService
from careconnect.core.matching import SORT_KEYS, MatchPreferences
from careconnect.data.models import CARETAKER, User

router = APIRouter(prefix="/api", tags=["caretakers"])


@router.get("/caretakers")
async def search_caretakers(
    sort_by: str = Query(default="relevance", description="One of: " + ", ".join(SORT_KEYS)),
    preferences: MatchPreferences = Depends(match_preferences),
    service: CareService = Depends(get_service),
) -> list[dict]:
    profiles = service.search_caretakers(preferences, sort_by)
    return [caretaker_view(service.get_user(p.user_id), p) for p in profiles]


@router.get("/caretakers/recommendations")
async def recommend_caretakers(
    count: int | None = Query(default=None, ge=0),
    preferences: MatchPreferences = Depends(match_preferences),
    service: CareService = Depends(get_service),
) -> list[dict]:
    ranked = service.recommend_caretakers(preferences, count)
    return [
        caretaker_view(service.get_user(r.profile.user_id), r.profile, r.score)
        for r in ranked
    ]


@router.get("/caretakers/{user_id}")
async def get_caretaker(
    user_id: int,
    service: CareService = Depends(get_service),
) -> dict:
    user, profile = service.get_caretaker(user_id)
    return caretaker_view(user, profile)


@router.post("/caretaker/profile", status_code=201)
async def create_profile(
    body: ProfileFields,
    user: User = Depends(require_role(CARETAKER)),
    service: CareService = Depends(get_service),
) -> dict:
    profile = service.create_profile(user, body.model_dump())
    return caretaker_view(user, profile)


@router.put("/caretaker/profile")
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(require_role(CARETAKER)),
    service: CareService = Depends(get_service),
) -> dict:
    profile = service.update_profile(user, body.model_dump(exclude_none=True))
    return caretaker_view(user, profile)
