import pytest

from lms_admin.app.ui.status_badges import DEFAULT_BADGE_CLASS, status_badge_class


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("قيد المراجعة", "bg-warning"),
        ("مقبول", "bg-success"),
        ("مرفوض", "bg-danger"),
        ("نشطة", "bg-success"),
        ("مكتملة", "bg-secondary"),
        ("قريباً", "bg-info"),
    ],
)
def test_known_statuses(status: str, expected: str) -> None:
    assert status_badge_class(status) == expected


def test_unknown_status_uses_secondary() -> None:
    assert status_badge_class("foo") == DEFAULT_BADGE_CLASS == "bg-secondary"
    assert status_badge_class(None) == "bg-secondary"
