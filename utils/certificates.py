"""
Certificate Input
Status values and field validation shared by the API services and the client
"""

import enum
from datetime import date
from typing import Any, Dict, Optional

from services.errors import ValidationError
from utils.validators import sanitize_string, validate_url, validate_date_range, missing_fields


class CertificateStatus(str, enum.Enum):
    """Certificate progress status"""
    STARTED = "started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


TEXT_FIELDS = (
    "course_name",
    "course_link",
    "organization",
    "certificate_name",
    "level",
    "category",
    "demo",
    "output",
)
DATE_FIELDS = ("start_date", "end_date")
REQUIRED_FIELDS = ("course_name", "organization")
STATUS_VALUES = {s.value for s in CertificateStatus}


def normalize_status(value: Optional[str]) -> Optional[str]:
    """'In Progress' -> 'in-progress'; None and blanks stay None"""
    if value is None:
        return None
    if isinstance(value, CertificateStatus):
        return value.value
    value = "-".join(str(value).strip().lower().split())
    return value or None


def _parse_date(field: str, value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def validate_certificate_input(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Clean and validate certificate fields

    Unknown keys (including user_id and company_id) are dropped; ownership
    is decided by the service, never by this payload.

    Args:
        data: Raw snake_case input
        partial: True for updates - only supplied fields are checked

    Returns:
        Dict of cleaned fields

    Raises:
        ValidationError: on blank required fields, bad status, URL or dates
    """
    cleaned: Dict[str, Any] = {}

    for field in TEXT_FIELDS:
        if field in data:
            cleaned[field] = sanitize_string(data[field]) or None

    for field in DATE_FIELDS:
        if field in data:
            cleaned[field] = _parse_date(field, data[field])

    if "status" in data:
        cleaned["status"] = normalize_status(data["status"])

    required = REQUIRED_FIELDS if not partial else [f for f in REQUIRED_FIELDS if f in data]
    missing = missing_fields(cleaned, list(required))
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if not partial and cleaned.get("status") is None:
        cleaned["status"] = CertificateStatus.IN_PROGRESS.value

    status = cleaned.get("status")
    if status is not None and status not in STATUS_VALUES:
        raise ValidationError(
            f"Invalid status '{status}'. Expected one of: {', '.join(sorted(STATUS_VALUES))}"
        )

    link = cleaned.get("course_link")
    if link and not validate_url(link):
        raise ValidationError("course_link must be an http(s) URL")

    if not validate_date_range(cleaned.get("start_date"), cleaned.get("end_date")):
        raise ValidationError("end_date cannot be before start_date")

    return cleaned
