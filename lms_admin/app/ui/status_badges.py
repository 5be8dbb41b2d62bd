from __future__ import annotations

DEFAULT_BADGE_CLASS = "bg-secondary"

STATUS_BADGE_CLASSES: dict[str, str] = {
    "قيد المراجعة": "bg-warning",  # under review
    "مقبول": "bg-success",  # accepted
    "مرفوض": "bg-danger",  # rejected
    "نشطة": "bg-success",  # active
    "مكتملة": "bg-secondary",  # completed
    "قريباً": "bg-info",  # upcoming
}


def status_badge_class(status: str | None) -> str:
    if status is None:
        return DEFAULT_BADGE_CLASS
    return STATUS_BADGE_CLASSES.get(status, DEFAULT_BADGE_CLASS)
