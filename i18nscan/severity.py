"""Severity and category definitions for scanner findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def exit_priority(self) -> int:
        """Return an integer ranking to drive exit code decisions."""

        ordering = {
            Severity.ERROR: 2,
            Severity.WARNING: 1,
            Severity.INFO: 0,
        }
        return ordering[self]


class Category(str, Enum):
    """What question a finding answers."""

    HARDCODED_STRING = "hardcoded-string"
    EXTRACTED_KEY = "extracted-key"
