"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import (
    ensure_utc,
    is_valid_timezone,
    resolve_timezone,
    start_of_iso_week,
    start_of_month,
    start_of_next_month,
    utc_now,
)
from app.shared.utils.generators import generate_cuid, generate_password

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "generate_password",
    "is_valid_timezone",
    "resolve_timezone",
    "start_of_iso_week",
    "start_of_month",
    "start_of_next_month",
    "utc_now",
]
