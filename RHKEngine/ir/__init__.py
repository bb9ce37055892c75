"""
Analysis contract: field names, enumerations and payload validation.
"""

from .schema import (
    ACTIVITY_TYPES,
    CONTRACT_VERSION,
    GRADE_LABELS,
    GRADE_VALUES,
    SECTION_KINDS,
    ContractDescription,
    build_response_schema,
    describe_schema,
    response_schema_text,
)
from .validator import AnalysisValidator, ValidationOutcome, ValidationWarning

__all__ = [
    "ACTIVITY_TYPES",
    "CONTRACT_VERSION",
    "GRADE_LABELS",
    "GRADE_VALUES",
    "SECTION_KINDS",
    "ContractDescription",
    "build_response_schema",
    "describe_schema",
    "response_schema_text",
    "AnalysisValidator",
    "ValidationOutcome",
    "ValidationWarning",
]
