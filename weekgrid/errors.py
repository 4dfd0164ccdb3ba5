"""
Error taxonomy.

All errors derive from ValueError so callers that already guard
against bad input with `except ValueError` keep working.
"""

from __future__ import annotations


class TimetableError(ValueError):
    """Base class for every error raised by weekgrid."""


class InvalidTimeFormat(TimetableError):
    """A time string is not HH:MM, or a slot ends before it starts."""


class InvalidTarget(TimetableError):
    """A resolution action does not fit the clash it was applied to."""


class UnmappableSlot(TimetableError):
    """A slot falls on a day that has no column in the current grid."""


class InvalidSlot(TimetableError):
    """A slot record is missing required fields or carries bad values."""


class DuplicateSlot(TimetableError):
    """Two slots with the same id were put into one selection."""
