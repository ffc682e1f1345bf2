"""
CareConnect — HTTP application.

create_app() wires the stores, mailer, notifier, reminder scheduler and care
service onto app.state. The lifespan starts the scheduler (restoring every
user's reminders) and stops it on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from careconnect.adapters.mailer_factory import create_mailer
from careconnect.api.routes import (
    assignments,
    caretakers,
    medications,
    notifications,
    tasks,
    users,
)
from careconnect.config import settings
from careconnect.core.care_service import (
    AccessDeniedError,
    CareService,
    CareServiceError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
)
from careconnect.core.notifier import CareNotifier
from careconnect.core.scheduler import NowFn, ReminderScheduler, SleepFn
from careconnect.data.db import CareStores
from careconnect.data.seed import seed_caretakers
from careconnect.ports.mail_port import MailerPort

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[CareServiceError], int] = {
    InvalidInputError: 400,
    AccessDeniedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}


async def _care_service_error(request: Request, exc: CareServiceError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 400)
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@asynccontextmanager
async def _lifespan(app: FastAPI):
    if settings.SEED_CARETAKERS:
        seed_caretakers(app.state.stores)
    app.state.scheduler.start()
    logger.info("CareConnect API started")
    try:
        yield
    finally:
        await app.state.scheduler.stop()
        logger.info("CareConnect API stopped")


def create_app(
    stores: CareStores | None = None,
    mailer: MailerPort | None = None,
    now_fn: NowFn | None = None,
    sleep_fn: SleepFn | None = None,
) -> FastAPI:
    app = FastAPI(title="CareConnect", lifespan=_lifespan)

    stores = stores or CareStores.open()
    mailer = mailer or create_mailer()
    notifier = CareNotifier(mailer, stores.notifications)
    scheduler = ReminderScheduler(
        stores,
        notifier,
        now_fn=now_fn,
        sleep_fn=sleep_fn,
        timezone=settings.TIMEZONE,
        task_lead_minutes=settings.TASK_REMINDER_LEAD_MINUTES,
        sweep_time=settings.REMINDER_SWEEP_TIME,
    )

    app.state.stores = stores
    app.state.mailer = mailer
    app.state.scheduler = scheduler
    app.state.service = CareService(
        stores, scheduler, notifier, top_recommendations=settings.TOP_RECOMMENDATIONS,
    )

    app.add_exception_handler(CareServiceError, _care_service_error)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    for module in (users, caretakers, assignments, medications, tasks, notifications):
        app.include_router(module.router)
    return app
