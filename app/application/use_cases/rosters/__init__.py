"""Roster use cases: roster lifecycle and shift mutations."""

from app.application.use_cases.rosters.roster_operations import RosterService

__all__ = ["RosterService"]
