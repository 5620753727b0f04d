"""
Permissions
Closed permission set and the default roles seeded for every company
"""

import enum
from typing import FrozenSet, Iterable, List
from loguru import logger


class Permission(str, enum.Enum):
    """Permission enumeration"""
    MANAGE_CERTIFICATES = "manage-certificates"
    MANAGE_USERS = "manage-users"
    MANAGE_ROLES = "manage-roles"
    VIEW_REPORTS = "view-reports"


ALL_PERMISSIONS: FrozenSet[Permission] = frozenset(Permission)

OWNER_ROLE_NAME = "Owner"
ADMIN_ROLE_NAME = "Admin"
EMPLOYEE_ROLE_NAME = "Employee"

# Seeded at company signup. Owner and Admin carry every permission;
# Employee is the fallback role for new employees.
DEFAULT_ROLES = [
    {"name": OWNER_ROLE_NAME, "permissions": sorted(p.value for p in ALL_PERMISSIONS), "is_default": False},
    {"name": ADMIN_ROLE_NAME, "permissions": sorted(p.value for p in ALL_PERMISSIONS), "is_default": False},
    {"name": EMPLOYEE_ROLE_NAME, "permissions": [], "is_default": True},
]


def is_owner_role_name(name: str) -> bool:
    """Owner-class roles are matched by name, case-insensitively"""
    return (name or "").strip().lower() == OWNER_ROLE_NAME.lower()


def parse_permissions(values: Iterable[str]) -> FrozenSet[Permission]:
    """
    Convert stored permission strings into enum members

    Unknown strings are dropped (and logged) so a stale or mistyped entry
    never grants anything.
    """
    parsed = set()
    for value in values or []:
        try:
            parsed.add(Permission(value))
        except ValueError:
            logger.warning(f"Ignoring unknown permission: {value!r}")
    return frozenset(parsed)


def validate_permissions(values: Iterable[str]) -> List[str]:
    """
    Strict variant used on write

    Raises:
        ValueError: listing every unknown permission
    """
    values = list(values or [])
    unknown = [v for v in values if v not in {p.value for p in Permission}]
    if unknown:
        raise ValueError(f"Unknown permissions: {', '.join(map(str, unknown))}")
    return sorted(set(values))


def has_full_permissions(values: Iterable[str]) -> bool:
    """True when the permission list covers the whole enumeration"""
    return parse_permissions(values) == ALL_PERMISSIONS
