from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class SessionStatus(str, Enum):
    """Lifecycle state of an attendance session as stored in the DB."""

    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
