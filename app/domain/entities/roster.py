"""Roster domain entity.

Encapsulates the draft -> published state machine. Publishing is one-way;
a published roster and its shifts are immutable.
"""

from dataclasses import dataclass
from datetime import datetime

from app.domain.enums import RosterStatus
from app.domain.exceptions import InvalidStateException, ValidationException


@dataclass
class RosterEntity:
    """Domain entity for a roster (live schedule or reusable template)."""

    id: str
    tenant_id: str
    name: str
    start_date: datetime
    end_date: datetime
    is_published: bool = False
    is_template: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate roster business rules. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Roster name is required", field="name")
        validate_period(self.start_date, self.end_date)

    @property
    def status(self) -> RosterStatus:
        return RosterStatus.PUBLISHED if self.is_published else RosterStatus.DRAFT

    def ensure_editable(self, message: str) -> None:
        """Raise InvalidStateException with message if the roster is published."""
        if self.is_published:
            raise InvalidStateException(message, "roster", self.id)

    def publish(self, shift_count: int, unconfirmed_count: int) -> None:
        """Transition draft -> published after checking preconditions.

        Args:
            shift_count: Number of shifts in the roster.
            unconfirmed_count: Number of shifts not yet confirmed.

        Raises:
            InvalidStateException: Already published, empty, or unconfirmed shifts.
        """
        if self.is_published:
            raise InvalidStateException("Roster is already published", "roster", self.id)
        if shift_count == 0:
            raise InvalidStateException("Cannot publish an empty roster", "roster", self.id)
        if unconfirmed_count > 0:
            raise InvalidStateException(
                "All shifts must be confirmed before publishing", "roster", self.id
            )
        self.is_published = True

    def overlaps_period(self, start: datetime, end: datetime) -> bool:
        """Inclusive date-range overlap used between live rosters."""
        return self.start_date <= end and self.end_date >= start


def validate_period(start: datetime, end: datetime) -> None:
    """Raise ValidationException unless start < end."""
    if start >= end:
        raise ValidationException("End date must be after start date", field="end_date")
