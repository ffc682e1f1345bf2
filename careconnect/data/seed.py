"""
CareConnect — Demo caretaker seed data.

Loaded at startup when SEED_CARETAKERS is enabled, so a fresh database has
caretakers to search and match against. Usernames that already exist are
left alone.
"""

from __future__ import annotations

import logging

from careconnect.data.db import CareStores
from careconnect.data.models import CARETAKER, CaretakerProfile

logger = logging.getLogger(__name__)


DEMO_CARETAKERS: list[dict] = [
    {
        "username": "emma_wilson",
        "email": "emma.wilson@example.com",
        "full_name": "Emma Wilson",
        "profile": {
            "gender": "female",
            "age": 32,
            "bio": "Certified nurse with specialized training in dementia care.",
            "price_per_day": 180,
            "years_experience": 8,
            "location": "Boston, MA",
            "service_areas": ["Boston", "Cambridge", "Somerville"],
            "specializations": ["Alzheimer's care", "Medication management", "Memory care"],
            "is_certified": True,
            "is_background_checked": True,
            "provides_live_location": True,
            "image_url": "https://randomuser.me/api/portraits/women/22.jpg",
        },
        "rating": 4.8,
        "review_count": 32,
    },
    {
        "username": "james_miller",
        "email": "james.miller@example.com",
        "full_name": "James Miller",
        "profile": {
            "gender": "male",
            "age": 45,
            "bio": "Former hospital administrator focused on structured routines for dementia patients.",
            "price_per_day": 210,
            "years_experience": 15,
            "location": "Chicago, IL",
            "service_areas": ["Chicago", "Evanston", "Oak Park"],
            "specializations": ["Dementia care", "Parkinson's assistance", "Daily living assistance"],
            "is_certified": True,
            "is_background_checked": True,
            "image_url": "https://randomuser.me/api/portraits/men/32.jpg",
        },
        "rating": 4.6,
        "review_count": 21,
    },
    {
        "username": "sophia_rodriguez",
        "email": "sophia.rodriguez@example.com",
        "full_name": "Sophia Rodriguez",
        "profile": {
            "gender": "female",
            "age": 28,
            "bio": "Occupational therapist focused on cognitive stimulation. Bilingual in English and Spanish.",
            "price_per_day": 165,
            "years_experience": 5,
            "location": "Miami, FL",
            "service_areas": ["Miami", "Coral Gables", "Miami Beach"],
            "specializations": ["Cognitive therapy", "Bilingual care", "Memory exercises"],
            "is_certified": True,
            "is_background_checked": True,
            "provides_live_location": True,
            "image_url": "https://randomuser.me/api/portraits/women/28.jpg",
        },
        "rating": 4.7,
        "review_count": 18,
    },
    {
        "username": "david_chen",
        "email": "david.chen@example.com",
        "full_name": "David Chen",
        "profile": {
            "gender": "male",
            "age": 37,
            "bio": "Nurse practitioner experienced in managing behavioral symptoms of dementia.",
            "price_per_day": 195,
            "years_experience": 10,
            "location": "San Francisco, CA",
            "service_areas": ["San Francisco", "Oakland", "Berkeley"],
            "specializations": ["Behavioral management", "Medication supervision", "Fall prevention"],
            "is_certified": True,
            "is_background_checked": True,
            "image_url": "https://randomuser.me/api/portraits/men/45.jpg",
        },
        "rating": 4.9,
        "review_count": 40,
    },
    {
        "username": "olivia_thompson",
        "email": "olivia.thompson@example.com",
        "full_name": "Olivia Thompson",
        "profile": {
            "gender": "female",
            "age": 41,
            "bio": "Social worker who brings the family into the care plan.",
            "price_per_day": 175,
            "years_experience": 12,
            "location": "Seattle, WA",
            "service_areas": ["Seattle", "Bellevue", "Tacoma"],
            "specializations": ["Family coordination", "Social engagement", "Emotional support"],
            "is_certified": True,
            "is_background_checked": True,
            "image_url": "https://randomuser.me/api/portraits/women/35.jpg",
        },
        "rating": 4.5,
        "review_count": 15,
    },
    {
        "username": "amelia_garcia",
        "email": "amelia.garcia@example.com",
        "full_name": "Amelia Garcia",
        "profile": {
            "gender": "female",
            "age": 30,
            "bio": "Nutritionist with dementia care training.",
            "price_per_day": 155,
            "years_experience": 6,
            "location": "Denver, CO",
            "service_areas": ["Denver", "Boulder", "Aurora"],
            "specializations": ["Nutrition planning", "Hydration monitoring", "Feeding assistance"],
            "is_certified": False,
            "is_background_checked": True,
            "is_available": False,
            "image_url": "https://randomuser.me/api/portraits/women/42.jpg",
        },
        "rating": None,
        "review_count": 0,
    },
]


def seed_caretakers(stores: CareStores, caretakers: list[dict] | None = None) -> int:
    """Insert the demo caretakers that are not registered yet. Returns how many were added."""
    added = 0
    for entry in caretakers if caretakers is not None else DEMO_CARETAKERS:
        if stores.users.get_by_username(entry["username"]) is not None:
            continue
        user = stores.users.add_user(
            entry["username"], entry["email"], entry["full_name"], CARETAKER,
        )
        stores.profiles.add_profile(CaretakerProfile(user_id=user.id, **entry["profile"]))
        if entry.get("rating") is not None:
            stores.profiles.set_rating(user.id, entry["rating"], entry.get("review_count", 0))
        added += 1

    if added:
        logger.info("Seeded %d demo caretakers", added)
    return added
