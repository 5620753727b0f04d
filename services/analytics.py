"""
Certificate Analytics
Pure rollups over certificate lists - no I/O
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence

from utils.certificates import CertificateStatus
from utils.helpers import calculate_percentage, count_by

UNKNOWN_EMPLOYEE = "Unknown Employee"


@dataclass
class UserCertificateCount:
    user_id: Hashable
    name: str
    certificates: int


@dataclass
class CertificateAggregate:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    started: int = 0
    completion_rate: float = 0.0
    by_status: Dict[str, int] = field(default_factory=dict)
    by_level: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    top_users: List[UserCertificateCount] = field(default_factory=list)


@dataclass
class DashboardStats:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    started: int = 0
    completion_rate: int = 0
    recent: List[Any] = field(default_factory=list)


def _status_counts(certificates: Sequence[Any]) -> Dict[str, int]:
    statuses = [getattr(c, "status", None) for c in certificates]
    return {
        "completed": statuses.count(CertificateStatus.COMPLETED.value),
        "in_progress": statuses.count(CertificateStatus.IN_PROGRESS.value),
        "started": statuses.count(CertificateStatus.STARTED.value),
    }


def aggregate_certificates(
    certificates: Sequence[Any],
    user_names: Optional[Mapping[Hashable, str]] = None,
    limit: int = 5
) -> CertificateAggregate:
    """
    Group certificates for the analytics charts

    Grouping is exact and case-sensitive; unset values count under "Unknown".
    Top users are ordered by descending count, ties kept in first-seen order.

    Args:
        certificates: Objects with status, level, category and user_id attributes
        user_names: Optional user_id -> display name
        limit: Number of top users to keep

    Returns:
        CertificateAggregate
    """
    user_names = user_names or {}
    total = len(certificates)
    counts = _status_counts(certificates)

    per_user: Dict[Hashable, int] = {}
    for certificate in certificates:
        per_user[certificate.user_id] = per_user.get(certificate.user_id, 0) + 1

    ranked = sorted(per_user.items(), key=lambda item: -item[1])[:limit]

    return CertificateAggregate(
        total=total,
        completion_rate=calculate_percentage(counts["completed"], total),
        by_status=count_by(getattr(c, "status", None) for c in certificates),
        by_level=count_by(getattr(c, "level", None) for c in certificates),
        by_category=count_by(getattr(c, "category", None) for c in certificates),
        top_users=[
            UserCertificateCount(
                user_id=user_id,
                name=user_names.get(user_id) or UNKNOWN_EMPLOYEE,
                certificates=count,
            )
            for user_id, count in ranked
        ],
        **counts,
    )


def dashboard_stats(certificates: Sequence[Any], limit: int = 5) -> DashboardStats:
    """
    Personal dashboard numbers

    Recent certificates are ordered by start_date, newest first; undated
    certificates go last.
    """
    total = len(certificates)
    counts = _status_counts(certificates)

    recent = sorted(
        certificates,
        key=lambda c: (c.start_date is not None, c.start_date or date.min),
        reverse=True,
    )[:limit]

    return DashboardStats(
        total=total,
        completion_rate=int(calculate_percentage(counts["completed"], total, decimals=0)),
        recent=recent,
        **counts,
    )
