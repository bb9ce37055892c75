"""
Core records: teacher profile, analysis result and the report data that
feeds the composer.

All records are frozen. `from_dict` constructors are lenient: they keep
whatever shape they can recover and leave judging the payload to
AnalysisValidator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value.strip() if isinstance(value, str) else str(value).strip()


@dataclass(frozen=True)
class TeacherProfile:
    """Author identity printed on the cover and signature blocks."""

    name: str
    unit: str
    locality: str
    id_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeacherProfile":
        data = data or {}
        id_number = _text(data.get("idNumber")) or None
        return cls(
            name=_text(data.get("name")),
            unit=_text(data.get("unit")),
            locality=_text(data.get("locality")),
            id_number=id_number,
        )

    def is_complete(self) -> bool:
        return bool(self.name and self.unit and self.locality)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "idNumber": self.id_number,
            "unit": self.unit,
            "locality": self.locality,
        }


@dataclass(frozen=True)
class Section:
    title: str
    kind: str
    content: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "kind": self.kind, "content": list(self.content)}


@dataclass(frozen=True)
class StudentGrade:
    name: str
    grade: str
    remark: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "grade": self.grade, "remark": self.remark}


@dataclass(frozen=True)
class AnalysisResult:
    """
    Typed view of an analyzer payload (contract version 1.0).

    Unknown enumeration values are kept as-is so that a validation warning
    can be attached while the report still renders.
    """

    chosen_title: str
    activity_type: str
    caption: str
    sections: Tuple[Section, ...] = ()
    student_grades: Tuple[StudentGrade, ...] = ()
    roster_principle: Optional[str] = None
    class_name: Optional[str] = None

    @property
    def has_roster(self) -> bool:
        return bool(self.student_grades)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AnalysisResult":
        payload = payload if isinstance(payload, dict) else {}

        sections = []
        raw_sections = payload.get("sections")
        for raw in raw_sections if isinstance(raw_sections, list) else []:
            if not isinstance(raw, dict):
                continue
            content = raw.get("content")
            if isinstance(content, str):
                content = [content]
            elif not isinstance(content, list):
                content = []
            sections.append(
                Section(
                    title=_text(raw.get("title")),
                    kind=_text(raw.get("kind")),
                    content=tuple(_text(item) for item in content if _text(item)),
                )
            )

        grades = []
        raw_grades = payload.get("studentGrades")
        for raw in raw_grades if isinstance(raw_grades, list) else []:
            if not isinstance(raw, dict):
                continue
            grades.append(
                StudentGrade(
                    name=_text(raw.get("name")),
                    grade=_text(raw.get("grade")),
                    remark=_text(raw.get("remark")),
                )
            )

        return cls(
            chosen_title=_text(payload.get("chosenTitle")),
            activity_type=_text(payload.get("activityType")),
            caption=_text(payload.get("caption")),
            sections=tuple(sections),
            student_grades=tuple(grades),
            roster_principle=_text(payload.get("rosterPrinciple")) or None,
            class_name=_text(payload.get("className")) or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "chosenTitle": self.chosen_title,
            "activityType": self.activity_type,
            "caption": self.caption,
            "sections": [section.to_dict() for section in self.sections],
            "studentGrades": [grade.to_dict() for grade in self.student_grades],
        }
        if self.roster_principle is not None:
            data["rosterPrinciple"] = self.roster_principle
        if self.class_name is not None:
            data["className"] = self.class_name
        return data


@dataclass(frozen=True)
class ReportData:
    """Everything one report is built from; fixed once the analysis returns."""

    profile: TeacherProfile
    category_id: str
    category_label: str
    period: str
    analysis: AnalysisResult
    report_date: str
    border_index: int
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "categoryId": self.category_id,
            "categoryLabel": self.category_label,
            "period": self.period,
            "analysis": self.analysis.to_dict(),
            "reportDate": self.report_date,
            "borderIndex": self.border_index,
            "hasImage": self.image is not None,
        }


__all__ = ["TeacherProfile", "Section", "StudentGrade", "AnalysisResult", "ReportData"]
