"""
Analysis contract (IR) shared by the analyzer prompt, the validator and the
composer.

This module is the single place where the payload's field names and
enumerations are declared. Treat it as a versioned wire format: bump
CONTRACT_VERSION whenever a field or an enumeration changes.

Payload fields (version 1.0):
    chosenTitle      string, required; one of the category candidate titles
    activityType     string, required; one of ACTIVITY_TYPES
    caption          string, required; one-sentence evidence caption
    sections         [{title, kind, content[]}]; kind in SECTION_KINDS
    studentGrades    [{name, grade, remark}]; grade in GRADE_VALUES
    rosterPrinciple  string, optional
    className        string, optional
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

CONTRACT_VERSION = "1.0"

# ====== Enumerations ======
ACTIVITY_TYPES: List[str] = ["Intrakurikuler", "Kokurikuler", "Ekstrakurikuler"]

SECTION_KIND_PARAGRAPH = "paragraph"
SECTION_KIND_LIST = "list"
SECTION_KINDS: List[str] = [SECTION_KIND_PARAGRAPH, SECTION_KIND_LIST]

GRADE_VALUES: List[str] = ["excellent", "good", "fair", "poor"]
GRADE_LABELS: Dict[str, str] = {
    "excellent": "Sangat Baik",
    "good": "Baik",
    "fair": "Cukup",
    "poor": "Perlu Bimbingan",
}

REQUIRED_FIELDS: List[str] = ["chosenTitle", "activityType", "caption"]
ROSTER_CONTEXT_FIELDS: List[str] = ["rosterPrinciple", "className"]

# ====== Schema fragments ======
section_schema: Dict[str, Any] = {
    "title": "Section",
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "kind": {"type": "string", "enum": SECTION_KINDS},
        "content": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "description": "paragraph: exactly one string; list: one or more strings",
        },
    },
    "required": ["title", "kind", "content"],
}

student_grade_schema: Dict[str, Any] = {
    "title": "StudentGrade",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "grade": {"type": "string", "enum": GRADE_VALUES},
        "remark": {"type": "string"},
    },
    "required": ["name", "grade", "remark"],
}


@dataclass(frozen=True)
class ContractDescription:
    """What an analyzer must produce for one category."""

    category_id: str
    required_fields: Tuple[str, ...]
    candidate_titles: Tuple[str, ...]
    section_template: Tuple[Tuple[str, str], ...]
    grade_template: Optional[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": CONTRACT_VERSION,
            "categoryId": self.category_id,
            "requiredFields": list(self.required_fields),
            "candidateTitles": list(self.candidate_titles),
            "sectionTemplate": [
                {"title": title, "kind": kind} for title, kind in self.section_template
            ],
            "gradeTemplate": self.grade_template,
        }


def describe_schema(category) -> ContractDescription:
    """
    Describe the contract for `category`.

    Narrative categories get their fixed (title, kind) section template and no
    grade template; the roster category gets an empty section template and a
    grade-table template instead.
    """
    grade_template = None
    required = list(REQUIRED_FIELDS)
    if category.is_roster:
        required.append("studentGrades")
        roster = category.roster_template
        grade_template = {
            "columns": list(roster.columns),
            "grades": list(GRADE_VALUES),
            "gradeLabels": dict(GRADE_LABELS),
            "contextFields": list(ROSTER_CONTEXT_FIELDS),
        }
    else:
        required.append("sections")

    return ContractDescription(
        category_id=category.id,
        required_fields=tuple(required),
        candidate_titles=tuple(category.candidate_titles),
        section_template=tuple((s.title, s.kind) for s in category.section_template),
        grade_template=grade_template,
    )


def build_response_schema(category) -> Dict[str, Any]:
    """JSON schema handed to the analyzer as its structured-output constraint."""
    properties: Dict[str, Any] = {
        "chosenTitle": {
            "type": "string",
            "description": "Judul RHK yang dipilih dari daftar kandidat",
        },
        "activityType": {"type": "string", "enum": ACTIVITY_TYPES},
        "caption": {
            "type": "string",
            "description": "Satu kalimat keterangan bukti kegiatan",
        },
    }
    required = list(REQUIRED_FIELDS)

    if category.is_roster:
        properties["studentGrades"] = {"type": "array", "items": student_grade_schema}
        properties["rosterPrinciple"] = {"type": "string"}
        properties["className"] = {"type": "string"}
        required.append("studentGrades")
    else:
        properties["sections"] = {
            "type": "array",
            "items": section_schema,
            "minItems": len(category.section_template),
            "maxItems": len(category.section_template),
        }
        required.append("sections")

    return {
        "title": f"AnalysisResult:{category.id}",
        "type": "object",
        "properties": properties,
        "required": required,
    }


def response_schema_text(category) -> str:
    """Pretty-printed schema for embedding in prompts."""
    return json.dumps(build_response_schema(category), ensure_ascii=False, indent=2)


__all__ = [
    "CONTRACT_VERSION",
    "ACTIVITY_TYPES",
    "SECTION_KIND_PARAGRAPH",
    "SECTION_KIND_LIST",
    "SECTION_KINDS",
    "GRADE_VALUES",
    "GRADE_LABELS",
    "REQUIRED_FIELDS",
    "ROSTER_CONTEXT_FIELDS",
    "ContractDescription",
    "describe_schema",
    "build_response_schema",
    "response_schema_text",
]
