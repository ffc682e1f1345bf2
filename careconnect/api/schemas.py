"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ProfileFields(BaseModel):
    bio: str
    price_per_day: float = Field(gt=0)
    location: str
    service_areas: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    gender: str = "not specified"
    age: int | None = Field(default=None, ge=18)
    years_experience: int | None = Field(default=None, ge=0)
    is_certified: bool = False
    is_background_checked: bool = False
    is_available: bool = True
    provides_live_location: bool = False
    image_url: str | None = None


class ProfileUpdate(BaseModel):
    """Partial profile update; only the fields sent are changed."""

    bio: str | None = None
    price_per_day: float | None = Field(default=None, gt=0)
    location: str | None = None
    service_areas: list[str] | None = None
    specializations: list[str] | None = None
    gender: str | None = None
    age: int | None = Field(default=None, ge=18)
    years_experience: int | None = Field(default=None, ge=0)
    is_certified: bool | None = None
    is_background_checked: bool | None = None
    is_available: bool | None = None
    provides_live_location: bool | None = None
    image_url: str | None = None


class UserCreate(BaseModel):
    username: str = Field(min_length=3)
    email: str
    full_name: str
    role: Literal["patient", "caretaker"]
    phone: str | None = None
    profile: ProfileFields | None = None


class AssignmentCreate(BaseModel):
    """Omitted ids default to the caller for their own role."""

    patient_id: int | None = None
    caretaker_id: int | None = None


class MedicationCreate(BaseModel):
    name: str = Field(min_length=1)
    dosage: str = Field(min_length=1)
    schedule: list[str] = Field(min_length=1)   # "HH:MM" slots
    instructions: str | None = None
    patient_id: int | None = None


class MedicationUpdate(BaseModel):
    name: str | None = None
    dosage: str | None = None
    schedule: list[str] | None = None
    instructions: str | None = None


class MedicationLogCreate(BaseModel):
    notes: str = ""


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    due_date: datetime
    description: str | None = None
    recurrence: str | None = None
    patient_id: int | None = None


class TaskUpdate(BaseModel):
    title: str | None = None
    due_date: datetime | None = None
    description: str | None = None
    recurrence: str | None = None
