from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response

from careconnect.api.deps import get_current_user, get_service
from careconnect.api.schemas import TaskCreate, TaskUpdate
from careconnect.core.care_service import CareService
from careconnect.data.models import User

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(
    patient_id: int | None = Query(default=None),
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> list[dict]:
    return [asdict(t) for t in service.list_tasks(user, patient_id)]


@router.post("", status_code=201)
async def create_task(
    body: TaskCreate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    task = service.create_task(
        user,
        title=body.title,
        due_date=body.due_date,
        description=body.description,
        recurrence=body.recurrence,
        patient_id=body.patient_id,
    )
    return asdict(task)


@router.put("/{task_id}")
async def update_task(
    task_id: int,
    body: TaskUpdate,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    task = service.update_task(user, task_id, body.model_dump(exclude_none=True))
    return asdict(task)


@router.post("/{task_id}/complete")
async def complete_task(
    task_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> dict:
    return asdict(await service.complete_task(user, task_id))


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    user: User = Depends(get_current_user),
    service: CareService = Depends(get_service),
) -> Response:
    service.delete_task(user, task_id)
    return Response(status_code=204)
