"""
API dependencies.

Resolves the caller from the ``X-User-Id`` header and enforces roles.
Session and password handling live outside this service.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Header, HTTPException, Query, Request

from careconnect.core.care_service import CareService
from careconnect.core.matching import MatchPreferences
from careconnect.data.models import User


def get_service(request: Request) -> CareService:
    return request.app.state.service


def get_current_user(
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> User:
    """Look up the calling user. Missing, malformed or unknown ids are 401."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Authentication required") from None

    user = get_service(request).get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def require_role(*allowed: str) -> Callable:
    """Return a dependency that only lets the given roles through."""

    def _checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise HTTPException(status_code=403, detail="Access denied")
        return user

    return _checker


def match_preferences(
    location: str | None = Query(default=None),
    service_area: str | None = Query(default=None),
    specialization: str | None = Query(default=None),
    gender: str | None = Query(default=None),
    min_price: str | None = Query(default=None),
    max_price: str | None = Query(default=None),
    min_age: str | None = Query(default=None),
    max_age: str | None = Query(default=None),
    is_certified: str | None = Query(default=None),
    is_background_checked: str | None = Query(default=None),
    is_available: str | None = Query(default=None),
) -> MatchPreferences:
    """Search criteria from the query string. Unparsable values are ignored."""
    return MatchPreferences.from_mapping({
        "location": location,
        "service_area": service_area,
        "specialization": specialization,
        "gender": gender,
        "min_price": min_price,
        "max_price": max_price,
        "min_age": min_age,
        "max_age": max_age,
        "is_certified": is_certified,
        "is_background_checked": is_background_checked,
        "is_available": is_available,
    })
