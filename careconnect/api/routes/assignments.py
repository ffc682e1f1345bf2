from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from careconnect.api.deps import get_current_user, get_service, require_role
from careconnect.api.schemas import AssignmentCreate
from careconnect.api.views import contact_view
from careconnect.core.care_service import CareService
from careconnect.data.models import CARETAKER, PATIENT, User

router = APIRouter(prefix="/api", tags=["assignments"])


@router.post("/assignments", status_code=201)
async def create_assignment(
    body: AssignmentCreate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    patient_id = body.patient_id
    caretaker_id = body.caretaker_id
    if patient_id is None and user.role == PATIENT:
        patient_id = user.id
    if caretaker_id is None and user.role == CARETAKER:
        caretaker_id = user.id
    if patient_id is None or caretaker_id is None:
        raise HTTPException(status_code=400, detail="patient_id and caretaker_id are required")

    assignment = await service.create_assignment(user, patient_id, caretaker_id)
    return asdict(assignment)


@router.get("/patient/assignments")
async def patient_assignments(
    user: User = Depends(require_role(PATIENT)),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [
        {**asdict(a), "caretaker": contact_view(c)}
        for a, c in service.list_patient_assignments(user)
    ]


@router.get("/caretaker/assignments")
async def caretaker_assignments(
    user: User = Depends(require_role(CARETAKER)),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [
        {**asdict(a), "patient": contact_view(p)}
        for a, p in service.list_caretaker_assignments(user)
    ]


@router.post("/assignments/{assignment_id}/end")
async def end_assignment(
    assignment_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    return asdict(service.end_assignment(user, assignment_id))
