"""
CareConnect — Entry Point.

Single entry point: `python main.py` starts the HTTP API and the reminder
scheduler.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

import uvicorn

from careconnect.api.app import create_app
from careconnect.config import settings


def main() -> None:
    uvicorn.run(create_app(), host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
