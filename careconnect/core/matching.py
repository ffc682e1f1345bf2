"""Caretaker matching — pure business logic.

Filters caretaker profiles by hard constraints, then scores and ranks the
survivors against soft preferences. The score is additive and unnormalized;
it only orders candidates relative to each other.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, field_validator

from careconnect.data.models import CaretakerProfile

logger = logging.getLogger(__name__)

_DEFAULT_RATING = 4.0
_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


class MatchPreferences(BaseModel):
    """Optional filter / preference criteria for one search.

    Every field is lenient: a value of the wrong type or an unparsable
    string becomes None, which means "no constraint".
    """

    location: str | None = None
    service_area: str | None = None
    specialization: str | None = None
    gender: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_age: int | None = None
    max_age: int | None = None
    is_certified: bool | None = None
    is_background_checked: bool | None = None
    is_available: bool | None = None

    @field_validator("location", "service_area", "specialization", "gender", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v.strip()

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _number(cls, v: Any) -> float | None:
        if isinstance(v, bool) or v is None:
            return None
        try:
            number = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        return number if math.isfinite(number) else None

    @field_validator("min_age", "max_age", mode="before")
    @classmethod
    def _whole_number(cls, v: Any) -> int | None:
        if isinstance(v, bool) or v is None:
            return None
        try:
            number = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        return int(number) if math.isfinite(number) else None

    @field_validator("is_certified", "is_background_checked", "is_available", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool | None:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return None

    @classmethod
    def from_mapping(cls, data: Any) -> MatchPreferences:
        """Build preferences from an arbitrary mapping; anything else is empty."""
        if not isinstance(data, Mapping):
            return cls()
        known = {k: v for k, v in data.items() if k in cls.model_fields}
        return cls.model_validate(known)


@dataclass(frozen=True)
class MatchWeights:
    """Points awarded by each scoring term."""

    rating_multiplier: float = 10.0
    location: float = 20.0
    service_area: float = 15.0
    gender: float = 15.0
    age_range: float = 15.0
    price_cap: float = 20.0
    price_divisor: float = 5.0        # one point per 5 currency units under max
    specialization: float = 25.0
    certified: float = 15.0
    background_checked: float = 15.0
    experience_per_year: float = 2.0
    experience_cap: float = 20.0


DEFAULT_WEIGHTS = MatchWeights()


@dataclass
class RankedCaretaker:
    """A profile paired with its match score."""

    profile: CaretakerProfile
    score: float


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _any_contains(values: Iterable[str], needle: str) -> bool:
    return any(_contains(v, needle) for v in values or ())


def _coerce(preferences: MatchPreferences | Mapping | None) -> MatchPreferences:
    if isinstance(preferences, MatchPreferences):
        return preferences
    return MatchPreferences.from_mapping(preferences)


def matches_criteria(profile: CaretakerProfile, criteria: MatchPreferences) -> bool:
    """True if the profile passes every criterion that is set."""
    if criteria.location and not _contains(profile.location, criteria.location):
        return False
    if criteria.service_area and not _any_contains(profile.service_areas, criteria.service_area):
        return False
    if criteria.specialization and not _any_contains(
        profile.specializations, criteria.specialization
    ):
        return False
    if criteria.min_price is not None and profile.price_per_day < criteria.min_price:
        return False
    if criteria.max_price is not None and profile.price_per_day > criteria.max_price:
        return False
    if criteria.gender and profile.gender != criteria.gender:
        return False
    if criteria.min_age is not None and (profile.age is None or profile.age < criteria.min_age):
        return False
    if criteria.max_age is not None and (profile.age is None or profile.age > criteria.max_age):
        return False
    if criteria.is_certified and not profile.is_certified:
        return False
    if criteria.is_background_checked and not profile.is_background_checked:
        return False
    if criteria.is_available and not profile.is_available:
        return False
    return True


def filter_caretakers(
    candidates: Iterable[CaretakerProfile],
    criteria: MatchPreferences | Mapping | None = None,
) -> list[CaretakerProfile]:
    """Keep the candidates that satisfy ALL provided criteria, in source order."""
    criteria = _coerce(criteria)
    return [c for c in candidates if matches_criteria(c, criteria)]


def score_caretaker(
    profile: CaretakerProfile,
    preferences: MatchPreferences | Mapping | None = None,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> float:
    """Additive match score of one profile against the preferences."""
    prefs = _coerce(preferences)
    rating = profile.rating if profile.rating is not None else _DEFAULT_RATING
    score = rating * weights.rating_multiplier

    if prefs.location and _contains(profile.location, prefs.location):
        score += weights.location

    if prefs.service_area and _any_contains(profile.service_areas, prefs.service_area):
        score += weights.service_area

    if prefs.gender and profile.gender == prefs.gender:
        score += weights.gender

    if (
        prefs.min_age is not None
        and prefs.max_age is not None
        and profile.age is not None
        and prefs.min_age <= profile.age <= prefs.max_age
    ):
        score += weights.age_range

    if prefs.max_price is not None:
        headroom = prefs.max_price - profile.price_per_day
        if headroom > 0:
            score += min(weights.price_cap, headroom / weights.price_divisor)

    if prefs.specialization and _any_contains(profile.specializations, prefs.specialization):
        score += weights.specialization

    if prefs.is_certified and profile.is_certified:
        score += weights.certified
    if prefs.is_background_checked and profile.is_background_checked:
        score += weights.background_checked

    years = profile.years_experience or 0
    score += min(weights.experience_cap, years * weights.experience_per_year)

    return score


def rank_caretakers(
    candidates: Iterable[CaretakerProfile],
    preferences: MatchPreferences | Mapping | None = None,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> list[RankedCaretaker]:
    """Score every candidate and sort by score, highest first.

    sorted() is stable, so equal scores keep their input order.
    """
    prefs = _coerce(preferences)
    ranked = [RankedCaretaker(profile=c, score=score_caretaker(c, prefs, weights)) for c in candidates]
    return sorted(ranked, key=lambda r: r.score, reverse=True)


def get_top_recommendations(
    candidates: Iterable[CaretakerProfile],
    preferences: MatchPreferences | Mapping | None = None,
    count: int = 3,
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> list[RankedCaretaker]:
    """Filter, rank and keep the best ``count`` caretakers."""
    prefs = _coerce(preferences)
    ranked = rank_caretakers(filter_caretakers(candidates, prefs), prefs, weights)
    top = ranked[: max(count, 0)]
    logger.debug("Top %d of %d ranked caretakers returned", len(top), len(ranked))
    return top


# ---------------------------------------------------------------------------
# Field-level sorting of the full result list
# ---------------------------------------------------------------------------

SORT_KEYS = ("relevance", "price_low", "price_high", "rating", "live_location")


def sort_caretakers(
    candidates: Iterable[CaretakerProfile],
    sort_by: str | None = "relevance",
) -> list[CaretakerProfile]:
    """Sort search results by a user-selected key.

    "relevance" keeps source order; unknown keys behave like "relevance".
    """
    items = list(candidates)
    if sort_by not in SORT_KEYS:
        logger.debug("Unknown sort key %r, keeping relevance order", sort_by)
        return items

    if sort_by == "price_low":
        return sorted(items, key=lambda c: c.price_per_day)
    if sort_by == "price_high":
        return sorted(items, key=lambda c: c.price_per_day, reverse=True)
    if sort_by == "rating":
        return sorted(items, key=lambda c: c.rating or 0.0, reverse=True)
    if sort_by == "live_location":
        return sorted(
            items,
            key=lambda c: (not c.provides_live_location, -(c.rating or 0.0)),
        )
    return items
