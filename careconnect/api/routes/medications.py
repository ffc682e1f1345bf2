from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response

from careconnect.api.deps import get_current_user, get_service
from careconnect.api.schemas import MedicationCreate, MedicationLogCreate, MedicationUpdate
from careconnect.api.views import medication_view
from careconnect.core.care_service import CareService
from careconnect.data.models import User

router = APIRouter(prefix="/api/medications", tags=["medications"])


@router.get("")
async def list_medications(
    patient_id: int | None = Query(default=None),
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [medication_view(m) for m in service.list_medications(user, patient_id)]


@router.post("", status_code=201)
async def create_medication(
    body: MedicationCreate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    medication = service.create_medication(
        user,
        name=body.name,
        dosage=body.dosage,
        schedule=body.schedule,
        instructions=body.instructions,
        patient_id=body.patient_id,
    )
    return medication_view(medication)


@router.put("/{medication_id}")
async def update_medication(
    medication_id: int,
    body: MedicationUpdate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    medication = service.update_medication(
        user, medication_id, body.model_dump(exclude_none=True),
    )
    return medication_view(medication)


@router.delete("/{medication_id}", status_code=204)
async def delete_medication(
    medication_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> Response:
    service.delete_medication(user, medication_id)
    return Response(status_code=204)


@router.get("/{medication_id}/logs")
async def list_medication_logs(
    medication_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [asdict(log) for log in service.list_medication_logs(user, medication_id)]


@router.post("/{medication_id}/logs", status_code=201)
async def log_medication(
    medication_id: int,
    body: MedicationLogCreate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    log = await service.log_medication(user, medication_id, body.notes)
    return asdict(log)
