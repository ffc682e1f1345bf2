"""Tests for careconnect.core.matching — pure filter/score/rank logic."""

import pytest

from careconnect.core.matching import (
    SORT_KEYS,
    MatchPreferences,
    MatchWeights,
    filter_caretakers,
    get_top_recommendations,
    rank_caretakers,
    score_caretaker,
    sort_caretakers,
)
from careconnect.data.models import CaretakerProfile


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _profile(user_id: int = 1, **overrides) -> CaretakerProfile:
    fields = dict(
        user_id=user_id,
        bio="Dementia carer",
        price_per_day=150.0,
        location="Boston, MA",
        service_areas=["Boston", "Cambridge"],
        specializations=["Alzheimer's care"],
        gender="female",
        age=35,
        years_experience=0,
        rating=4.0,
    )
    fields.update(overrides)
    return CaretakerProfile(**fields)


def _pool() -> list[CaretakerProfile]:
    return [
        _profile(1, location="Boston, MA", price_per_day=180, rating=4.8, is_certified=True),
        _profile(2, location="Chicago, IL", price_per_day=210, rating=4.6,
                 specializations=["Parkinson's assistance"], gender="male", age=45),
        _profile(3, location="Miami, FL", price_per_day=165, rating=None,
                 is_available=False, provides_live_location=True),
        _profile(4, location="Boston, MA", price_per_day=120, rating=3.5,
                 is_background_checked=True, provides_live_location=True, age=None),
    ]


# ---------------------------------------------------------------------------
# MatchPreferences
# ---------------------------------------------------------------------------


class TestMatchPreferences:
    def test_from_mapping_parses_strings(self):
        prefs = MatchPreferences.from_mapping({
            "min_price": "100", "max_age": "60", "is_certified": "true",
        })
        assert prefs.min_price == 100.0
        assert prefs.max_age == 60
        assert prefs.is_certified is True

    def test_malformed_values_become_none(self):
        prefs = MatchPreferences.from_mapping({
            "min_price": "cheap", "min_age": [], "location": 42, "is_available": "maybe",
        })
        assert prefs.min_price is None
        assert prefs.min_age is None
        assert prefs.location is None
        assert prefs.is_available is None

    @pytest.mark.parametrize("value", ["inf", "-inf", "1e400", "nan", float("inf"), 10**400])
    def test_non_finite_numbers_become_none(self, value):
        prefs = MatchPreferences.from_mapping({
            "min_age": value, "max_age": value, "min_price": value, "max_price": value,
        })
        assert prefs == MatchPreferences()

    def test_infinite_age_does_not_filter(self):
        pool = _pool()
        assert filter_caretakers(pool, {"max_age": "inf"}) == pool

    def test_non_mapping_is_empty(self):
        assert MatchPreferences.from_mapping("Boston") == MatchPreferences()
        assert MatchPreferences.from_mapping(None) == MatchPreferences()

    def test_unknown_keys_ignored(self):
        prefs = MatchPreferences.from_mapping({"location": "Boston", "colour": "blue"})
        assert prefs.location == "Boston"

    def test_blank_text_is_no_constraint(self):
        assert MatchPreferences(location="   ").location is None


# ---------------------------------------------------------------------------
# filter_caretakers
# ---------------------------------------------------------------------------


class TestFilterCaretakers:
    def test_no_criteria_keeps_everything_in_order(self):
        pool = _pool()
        assert filter_caretakers(pool, None) == pool

    def test_location_is_case_insensitive_substring(self):
        result = filter_caretakers(_pool(), {"location": "boston"})
        assert [c.user_id for c in result] == [1, 4]

    def test_service_area_matches_any_entry(self):
        result = filter_caretakers(_pool(), {"service_area": "cambridge"})
        assert len(result) == 4

    def test_specialization_substring(self):
        result = filter_caretakers(_pool(), {"specialization": "parkinson"})
        assert [c.user_id for c in result] == [2]

    def test_price_range_is_inclusive(self):
        result = filter_caretakers(_pool(), {"min_price": 165, "max_price": 180})
        assert [c.user_id for c in result] == [1, 3]

    def test_gender_exact(self):
        result = filter_caretakers(_pool(), {"gender": "male"})
        assert [c.user_id for c in result] == [2]

    def test_age_bounds_exclude_missing_age(self):
        result = filter_caretakers(_pool(), {"min_age": 30})
        assert 4 not in [c.user_id for c in result]

    def test_true_flag_constrains(self):
        result = filter_caretakers(_pool(), {"is_certified": True})
        assert [c.user_id for c in result] == [1]

    def test_false_flag_does_not_constrain(self):
        result = filter_caretakers(_pool(), {"is_available": False})
        assert len(result) == 4

    def test_available_excludes_unavailable(self):
        result = filter_caretakers(_pool(), {"is_available": True})
        assert 3 not in [c.user_id for c in result]

    def test_no_matches_returns_empty_list(self):
        assert filter_caretakers(_pool(), {"location": "Tokyo"}) == []

    def test_filter_is_idempotent(self):
        criteria = {"location": "Boston", "max_price": 200}
        once = filter_caretakers(_pool(), criteria)
        assert filter_caretakers(once, criteria) == once


# ---------------------------------------------------------------------------
# score_caretaker
# ---------------------------------------------------------------------------


class TestScoreCaretaker:
    def test_worked_example(self):
        profile = _profile(
            rating=4.8,
            is_certified=True,
            is_background_checked=True,
            years_experience=8,
            location="Boston",
            specializations=["Alzheimer's care"],
        )
        prefs = {
            "location": "Boston",
            "is_certified": True,
            "is_background_checked": True,
            "specialization": "Alzheimer's",
        }
        assert score_caretaker(profile, prefs) == pytest.approx(139)

    def test_missing_rating_defaults_to_four(self):
        assert score_caretaker(_profile(rating=None)) == pytest.approx(40)

    def test_age_bonus_needs_both_bounds(self):
        profile = _profile(age=35)
        assert score_caretaker(profile, {"min_age": 30}) == pytest.approx(40)
        assert score_caretaker(profile, {"min_age": 30, "max_age": 40}) == pytest.approx(55)

    def test_price_bonus_is_capped(self):
        assert score_caretaker(_profile(price_per_day=150), {"max_price": 175}) == pytest.approx(45)
        assert score_caretaker(_profile(price_per_day=50), {"max_price": 500}) == pytest.approx(60)

    def test_price_at_max_earns_nothing(self):
        assert score_caretaker(_profile(price_per_day=150), {"max_price": 150}) == pytest.approx(40)

    def test_experience_is_capped(self):
        assert score_caretaker(_profile(years_experience=25)) == pytest.approx(60)

    def test_gender_bonus(self):
        assert score_caretaker(_profile(), {"gender": "female"}) == pytest.approx(55)

    def test_custom_weights(self):
        weights = MatchWeights(rating_multiplier=1.0)
        assert score_caretaker(_profile(rating=5.0), None, weights) == pytest.approx(5)

    @pytest.mark.parametrize("low,high", [(1.0, 2.0), (3.5, 4.5), (4.9, 5.0)])
    def test_higher_rating_never_scores_lower(self, low, high):
        prefs = {"location": "Boston", "max_price": 200}
        assert score_caretaker(_profile(rating=high), prefs) >= score_caretaker(
            _profile(rating=low), prefs
        )


# ---------------------------------------------------------------------------
# rank_caretakers / get_top_recommendations
# ---------------------------------------------------------------------------


class TestRanking:
    def test_sorted_descending(self):
        ranked = rank_caretakers(_pool(), {"location": "Boston"})
        scores = [r.score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_input_order(self):
        pool = [_profile(i) for i in (5, 3, 9)]
        ranked = rank_caretakers(pool)
        assert [r.profile.user_id for r in ranked] == [5, 3, 9]

    def test_top_recommendations_respects_count(self):
        pool = [_profile(i) for i in range(10)]
        assert len(get_top_recommendations(pool, None, 3)) == 3

    def test_top_recommendations_satisfy_filters(self):
        top = get_top_recommendations(_pool(), {"location": "Boston", "max_price": 150}, 3)
        assert [r.profile.user_id for r in top] == [4]

    def test_top_recommendations_best_first(self):
        top = get_top_recommendations(_pool(), {"location": "Boston"}, 2)
        assert top[0].profile.user_id == 1

    def test_zero_count_returns_nothing(self):
        assert get_top_recommendations(_pool(), None, 0) == []


# ---------------------------------------------------------------------------
# sort_caretakers
# ---------------------------------------------------------------------------


class TestSortCaretakers:
    def test_price_low(self):
        assert [c.user_id for c in sort_caretakers(_pool(), "price_low")] == [4, 3, 1, 2]

    def test_price_high(self):
        assert [c.user_id for c in sort_caretakers(_pool(), "price_high")] == [2, 1, 3, 4]

    def test_rating_treats_missing_as_zero(self):
        assert [c.user_id for c in sort_caretakers(_pool(), "rating")] == [1, 2, 4, 3]

    def test_live_location_first(self):
        assert [c.user_id for c in sort_caretakers(_pool(), "live_location")] == [4, 3, 1, 2]

    def test_unknown_key_keeps_order(self):
        assert [c.user_id for c in sort_caretakers(_pool(), "shoe_size")] == [1, 2, 3, 4]

    @pytest.mark.parametrize("key", [None, "", "relevance"])
    def test_relevance_and_missing_keep_order(self, key):
        assert [c.user_id for c in sort_caretakers(_pool(), key)] == [1, 2, 3, 4]

    def test_every_sort_key_is_accepted(self):
        for key in SORT_KEYS:
            assert sorted(c.user_id for c in sort_caretakers(_pool(), key)) == [1, 2, 3, 4]
