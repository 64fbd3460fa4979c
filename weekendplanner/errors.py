"""
Error kinds raised while planning.

Every error derives from PlannerError so the CLI can catch one type at the
process boundary. Per-unit lookups (one day, one movie) only catch
NetworkFailure and ParseFailure.
"""

from __future__ import annotations


class PlannerError(Exception):
    """Base class for all planner errors."""


class NetworkFailure(PlannerError):
    """A request failed, returned a bad status, or the body could not be decoded."""


class ParseFailure(PlannerError):
    """The page does not have the structure we expect."""


class AuthFailure(PlannerError):
    """The restaurant login response lacks the session cookie or redirect."""


class NoCommonDay(PlannerError):
    """No day is marked ok by every calendar."""

    def __init__(self, message: str = "No Dates Available") -> None:
        super().__init__(message)
