"""
CareConnect — Centralized configuration.

Loads all settings from .env and validates required combinations.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from careconnect/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # SQLite
    DATABASE_PATH: str = "data/careconnect.db"

    # Mail provider: "log" | "smtp"
    MAIL_PROVIDER: str = "log"
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    SENDER_EMAIL: str = ""

    # Reminders
    TIMEZONE: str = "UTC"
    TASK_REMINDER_LEAD_MINUTES: int = 30
    REMINDER_SWEEP_TIME: str = "00:00:30"  # off the whole minute, see ReminderScheduler

    # Matching
    TOP_RECOMMENDATIONS: int = 3

    # Demo data
    SEED_CARETAKERS: bool = False

    # HTTP server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    @field_validator("SMTP_USE_TLS", "SEED_CARETAKERS", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in {"1", "true", "yes", "on"}

    @field_validator(
        "SMTP_PORT", "TASK_REMINDER_LEAD_MINUTES", "TOP_RECOMMENDATIONS", "API_PORT",
        mode="before",
    )
    @classmethod
    def parse_int(cls, v: str | int) -> int:
        return int(v)


def _load_settings() -> Settings:
    """Load settings from environment, validating required combinations."""
    mail_provider = os.getenv("MAIL_PROVIDER", "log").strip().lower()
    smtp_host = os.getenv("SMTP_HOST", "")
    sender = os.getenv("SENDER_EMAIL", "")

    if mail_provider == "smtp" and (not smtp_host or not sender):
        print(
            "ERROR: MAIL_PROVIDER=smtp requires SMTP_HOST and SENDER_EMAIL in .env",
            file=sys.stderr,
        )
        sys.exit(1)

    return Settings(
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/careconnect.db"),
        MAIL_PROVIDER=mail_provider,
        SMTP_HOST=smtp_host,
        SMTP_PORT=os.getenv("SMTP_PORT", "587"),
        SMTP_USERNAME=os.getenv("SMTP_USERNAME", ""),
        SMTP_PASSWORD=os.getenv("SMTP_PASSWORD", ""),
        SMTP_USE_TLS=os.getenv("SMTP_USE_TLS", "true"),
        SENDER_EMAIL=sender,
        TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        TASK_REMINDER_LEAD_MINUTES=os.getenv("TASK_REMINDER_LEAD_MINUTES", "30"),
        REMINDER_SWEEP_TIME=os.getenv("REMINDER_SWEEP_TIME", "00:00:30"),
        TOP_RECOMMENDATIONS=os.getenv("TOP_RECOMMENDATIONS", "3"),
        SEED_CARETAKERS=os.getenv("SEED_CARETAKERS", "false"),
        API_HOST=os.getenv("API_HOST", "127.0.0.1"),
        API_PORT=os.getenv("API_PORT", "8000"),
    )


# Singleton, imported by all other modules as:
#   from careconnect.config import settings
settings = _load_settings()
