from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles; the value is what gets stored and sent over the wire."""

    MANAGER = "Manager"
    EMPLOYEE = "Employee"
    COMPANY = "Company"


class Capability(str, Enum):
    """Single permitted action. Roles map to sets of these in ``permissions``."""

    REGISTER_WORK = "register_work"
    EDIT_RECORDS = "edit_records"
    VIEW_REPORTS = "view_reports"
    VIEW_ALL_RECORDS = "view_all_records"
    MANAGE_USERS = "manage_users"
