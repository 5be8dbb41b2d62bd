from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from lms_admin.app.ui.columns import Align, ColumnDef

GENDER_LABELS = {"M": "ذكر", "F": "أنثى"}
UNKNOWN_GENDER = "غير محدد"

Summary = Callable[[Sequence[dict[str, Any]], date], dict[str, int]]


@dataclass(frozen=True)
class Screen:
    resource: str
    title: str
    columns: tuple[ColumnDef, ...]
    search_keys: tuple[str, ...] = ()
    summary: Summary | None = None

    def summarize(self, rows: Sequence[dict[str, Any]], today: date | None = None) -> dict[str, int]:
        """Header counters shown above a listing, computed over every loaded row."""
        if self.summary is None:
            return {"الإجمالي": len(rows)}
        return self.summary(rows, today or date.today())


def iso_date(value: Any) -> Any:
    if not isinstance(value, str) or not value:
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return value


def _full_name(row: dict[str, Any]) -> str:
    return " ".join(part for part in (row.get("firstName"), row.get("lastName")) if part)


def _answer_count(row: dict[str, Any]) -> int:
    answers = row.get("answers")
    return len(answers) if isinstance(answers, list) else 0


def _course_status(row: dict[str, Any], today: date | None = None) -> str:
    today = today or date.today()
    start = iso_date(row.get("startDate"))
    end = iso_date(row.get("endDate"))
    if isinstance(start, date) and start > today:
        return "قريباً"
    if isinstance(end, date) and end < today:
        return "مكتملة"
    return "نشطة"


def _gender(row: dict[str, Any]) -> str:
    return GENDER_LABELS.get(row.get("gender") or "", UNKNOWN_GENDER)


def _course_summary(rows: Sequence[dict[str, Any]], today: date) -> dict[str, int]:
    ends = [iso_date(row.get("endDate")) for row in rows]
    return {
        "إجمالي الدورات": len(rows),
        "الدورات النشطة": sum(1 for end in ends if isinstance(end, date) and end >= today),
    }


def _instructor_summary(rows: Sequence[dict[str, Any]], _today: date) -> dict[str, int]:
    genders = [_gender(row) for row in rows]
    return {
        "إجمالي المعلمين": len(rows),
        "ذكور": genders.count(GENDER_LABELS["M"]),
        "إناث": genders.count(GENDER_LABELS["F"]),
    }


SCREENS: dict[str, Screen] = {
    "courses": Screen(
        resource="courses",
        title="الدورات",
        columns=(
            ColumnDef("id", "الكود ID", sortable=True, width=12),
            ColumnDef("title", "اسم الدورة", sortable=True),
            ColumnDef("description", "وصف الدورة", sortable=True, width=30),
            ColumnDef("startDate", "تاريخ البداية", sortable=True, selector=lambda row: iso_date(row.get("startDate"))),
            ColumnDef("endDate", "تاريخ الانتهاء", sortable=True, selector=lambda row: iso_date(row.get("endDate"))),
            ColumnDef("price", "السعر", sortable=True, align=Align.RIGHT),
            ColumnDef("status", "الحالة", align=Align.CENTER, selector=_course_status),
        ),
        search_keys=("title", "description"),
        summary=_course_summary,
    ),
    "students": Screen(
        resource="students",
        title="الطلاب",
        columns=(
            ColumnDef("id", "ID", sortable=True, width=12),
            ColumnDef("name", "اسم الطالب", sortable=True, selector=_full_name),
            ColumnDef("email", "البريد الإلكتروني", sortable=True),
            ColumnDef("phoneNumber", "رقم الهاتف", sortable=True),
            ColumnDef("gender", "الجنس", sortable=True, align=Align.CENTER, selector=_gender),
        ),
        search_keys=("firstName", "lastName", "email", "phoneNumber"),
    ),
    "instructors": Screen(
        resource="instructors",
        title="المعلمين",
        columns=(
            ColumnDef("id", "الكود ID", sortable=True, width=12),
            ColumnDef("name", "اسم المعلم", sortable=True, selector=_full_name),
            ColumnDef("phoneNumber", "رقم الهاتف", sortable=True),
            ColumnDef("gender", "النوع", sortable=True, align=Align.CENTER, selector=_gender),
        ),
        search_keys=("firstName", "lastName", "email", "phoneNumber"),
        summary=_instructor_summary,
    ),
    "exams": Screen(
        resource="exams",
        title="الاختبارات",
        columns=(
            ColumnDef("title", "اسم الاختبار", sortable=True),
            ColumnDef("durationMinutes", "المدة (دقيقة)", sortable=True, align=Align.CENTER),
            ColumnDef("startDate", "تاريخ البداية", sortable=True, selector=lambda row: iso_date(row.get("startDate"))),
        ),
        search_keys=("title",),
    ),
    "questions": Screen(
        resource="questions",
        title="الأسئلة",
        columns=(
            ColumnDef("text", "السؤال", sortable=True, width=40),
            ColumnDef("point", "الدرجة", sortable=True, align=Align.CENTER),
            ColumnDef("answers", "عدد الإجابات", align=Align.CENTER, selector=_answer_count),
        ),
        search_keys=("text",),
    ),
    "answers": Screen(
        resource="answers",
        title="الإجابات",
        columns=(
            ColumnDef("text", "الإجابة", sortable=True, width=40),
            ColumnDef("isCorrect", "صحيحة", sortable=True, align=Align.CENTER),
        ),
        search_keys=("text",),
    ),
}
