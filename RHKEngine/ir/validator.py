"""
Analysis payload validator.

The analyzer is asked to follow the contract in `schema.py`, but nothing
guarantees it does. This validator checks a raw payload against a category
and reports two lists: errors (the payload breaks the contract) and warnings
(the payload is usable but deviates from what the category suggests).
Messages use path syntax (`sections[1].content`) so they can be traced back.

The composer never rejects a payload: it turns both lists into
ValidationWarning records and renders what it has.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .schema import (
    ACTIVITY_TYPES,
    GRADE_VALUES,
    REQUIRED_FIELDS,
    SECTION_KIND_LIST,
    SECTION_KIND_PARAGRAPH,
    SECTION_KINDS,
)


@dataclass(frozen=True)
class ValidationWarning:
    """Non-fatal validation record attached to a composed report."""

    message: str
    blocking: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "blocking": self.blocking}


@dataclass
class ValidationOutcome:
    """Validation result"""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def as_warnings(self) -> Tuple[ValidationWarning, ...]:
        """Errors first (flagged blocking), then soft warnings."""
        return tuple(ValidationWarning(msg, blocking=True) for msg in self.errors) + tuple(
            ValidationWarning(msg) for msg in self.warnings
        )


class AnalysisValidator:
    """
    Contract validator for analyzer payloads.

    Notes:
        - validate() is pure: the same payload and category give the same outcome
        - narrative/roster mismatch is an error, template drift is a warning
    """

    # ======== Public API ========

    def validate(self, payload: Any, category) -> ValidationOutcome:
        outcome = ValidationOutcome()
        if not isinstance(payload, dict):
            outcome.errors.append("payload must be an object")
            return outcome

        for name in REQUIRED_FIELDS:
            value = payload.get(name)
            if not isinstance(value, str) or not value.strip():
                outcome.errors.append(f"{name} is missing or empty")

        activity_type = payload.get("activityType")
        if isinstance(activity_type, str) and activity_type.strip():
            if activity_type not in ACTIVITY_TYPES:
                outcome.errors.append(f"activityType not supported: {activity_type}")

        chosen = payload.get("chosenTitle")
        if isinstance(chosen, str) and chosen.strip():
            if chosen not in category.candidate_titles:
                outcome.warnings.append(f"chosenTitle is not one of the candidate titles: {chosen}")

        sections = payload.get("sections")
        grades = payload.get("studentGrades")
        if category.is_roster:
            self._validate_roster(payload, grades, outcome)
            if sections:
                outcome.errors.append("sections must be empty for a roster category")
        else:
            self._validate_sections(sections, category, outcome)
            if grades:
                outcome.errors.append("studentGrades must be empty for a narrative category")

        return outcome

    # ======== Internals ========

    def _validate_sections(self, sections: Any, category, outcome: ValidationOutcome):
        if sections is None or sections == []:
            outcome.errors.append("sections must be a non-empty array")
            return
        if not isinstance(sections, list):
            outcome.errors.append("sections must be an array")
            return

        for idx, section in enumerate(sections):
            self._validate_section(section, f"sections[{idx}]", outcome.errors)

        template = category.section_template
        if len(sections) != len(template):
            outcome.warnings.append(
                f"sections has {len(sections)} entries, template expects {len(template)}"
            )
        for idx, (section, expected) in enumerate(zip(sections, template)):
            if isinstance(section, dict) and section.get("title") != expected.title:
                outcome.warnings.append(
                    f"sections[{idx}].title '{section.get('title')}' differs from template '{expected.title}'"
                )

    def _validate_section(self, section: Any, path: str, errors: List[str]):
        if not isinstance(section, dict):
            errors.append(f"{path} must be an object")
            return

        title = section.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append(f"{path}.title is missing or empty")

        kind = section.get("kind")
        if kind not in SECTION_KINDS:
            errors.append(f"{path}.kind not supported: {kind}")
            return

        content = section.get("content")
        if not isinstance(content, list) or not all(isinstance(item, str) for item in content):
            errors.append(f"{path}.content must be an array of strings")
            return
        filled = [item for item in content if item.strip()]
        if len(filled) != len(content):
            errors.append(f"{path}.content holds {len(content) - len(filled)} blank entries")
        if kind == SECTION_KIND_PARAGRAPH and len(filled) != 1:
            errors.append(f"{path}.content must hold exactly one paragraph, got {len(filled)}")
        elif kind == SECTION_KIND_LIST and not filled:
            errors.append(f"{path}.content must hold at least one item")

    def _validate_roster(self, payload: Dict[str, Any], grades: Any, outcome: ValidationOutcome):
        if grades is None or grades == []:
            outcome.errors.append("studentGrades must be a non-empty array")
        elif not isinstance(grades, list):
            outcome.errors.append("studentGrades must be an array")
        else:
            for idx, entry in enumerate(grades):
                self._validate_grade(entry, f"studentGrades[{idx}]", outcome.errors)

        for name in ("rosterPrinciple", "className"):
            value = payload.get(name)
            if value is not None and not isinstance(value, str):
                outcome.errors.append(f"{name} must be a string")

    def _validate_grade(self, entry: Any, path: str, errors: List[str]):
        if not isinstance(entry, dict):
            errors.append(f"{path} must be an object")
            return
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(f"{path}.name is missing or empty")
        grade = entry.get("grade")
        if grade not in GRADE_VALUES:
            errors.append(f"{path}.grade not supported: {grade}")
        remark = entry.get("remark")
        if remark is not None and not isinstance(remark, str):
            errors.append(f"{path}.remark must be a string")


__all__ = ["ValidationWarning", "ValidationOutcome", "AnalysisValidator"]
