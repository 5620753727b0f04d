import uuid
from datetime import date
from types import SimpleNamespace

from services.analytics import UNKNOWN_EMPLOYEE, aggregate_certificates, dashboard_stats
from utils.helpers import calculate_percentage, count_by

ANA = uuid.uuid4()
BEN = uuid.uuid4()
GONE = uuid.uuid4()


def _cert(user_id, status="in-progress", level=None, category=None, start_date=None, name="Course"):
    return SimpleNamespace(
        user_id=user_id,
        status=status,
        level=level,
        category=category,
        start_date=start_date,
        course_name=name,
    )


def test_aggregate_of_nothing_is_all_zero():
    result = aggregate_certificates([])

    assert result.total == 0
    assert result.completed == result.in_progress == result.started == 0
    assert result.completion_rate == 0.0
    assert result.by_status == {}
    assert result.top_users == []


def test_aggregate_counts_statuses_and_groups():
    certificates = [
        _cert(ANA, "completed", "Beginner", "Cloud"),
        _cert(ANA, "completed", "Advanced", "Cloud"),
        _cert(BEN, "started", "Beginner", None),
        _cert(BEN, "in-progress", None, "Security"),
    ]

    result = aggregate_certificates(certificates, {ANA: "Ana", BEN: "Ben"})

    assert result.total == 4
    assert (result.completed, result.in_progress, result.started) == (2, 1, 1)
    assert result.completion_rate == 50.0
    assert result.by_status == {"completed": 2, "started": 1, "in-progress": 1}
    assert result.by_level == {"Beginner": 2, "Advanced": 1, "Unknown": 1}
    assert result.by_category == {"Cloud": 2, "Unknown": 1, "Security": 1}


def test_grouping_is_order_independent():
    certificates = [
        _cert(ANA, "completed", "Beginner", "Cloud"),
        _cert(BEN, "started", "Expert", "Data"),
        _cert(ANA, "in-progress", "Beginner", "Data"),
    ]

    forward = aggregate_certificates(certificates)
    backward = aggregate_certificates(list(reversed(certificates)))

    assert forward.by_status == backward.by_status
    assert forward.by_level == backward.by_level
    assert forward.by_category == backward.by_category
    assert forward.completion_rate == backward.completion_rate


def test_grouping_is_case_sensitive():
    result = aggregate_certificates([_cert(ANA, level="beginner"), _cert(ANA, level="Beginner")])
    assert result.by_level == {"beginner": 1, "Beginner": 1}


def test_top_users_ranked_with_unknown_owner():
    certificates = [_cert(BEN), _cert(GONE), _cert(GONE), _cert(ANA), _cert(GONE), _cert(ANA)]

    result = aggregate_certificates(certificates, {ANA: "Ana", BEN: "Ben"}, limit=2)

    assert [(u.name, u.certificates) for u in result.top_users] == [
        (UNKNOWN_EMPLOYEE, 3),
        ("Ana", 2),
    ]


def test_dashboard_recent_sorted_by_start_date_undated_last():
    certificates = [
        _cert(ANA, name="undated"),
        _cert(ANA, "completed", start_date=date(2024, 1, 5), name="january"),
        _cert(ANA, start_date=date(2024, 3, 1), name="march"),
    ]

    stats = dashboard_stats(certificates, limit=5)

    assert [c.course_name for c in stats.recent] == ["march", "january", "undated"]
    assert stats.total == 3
    assert stats.completed == 1
    assert stats.completion_rate == 33


def test_dashboard_limit():
    certificates = [_cert(ANA, start_date=date(2024, 1, day)) for day in range(1, 9)]
    assert len(dashboard_stats(certificates, limit=5).recent) == 5


def test_helpers():
    assert calculate_percentage(1, 3) == 33.3
    assert calculate_percentage(5, 0) == 0.0
    assert count_by(["a", None, "", "a"]) == {"a": 2, "Unknown": 2}
