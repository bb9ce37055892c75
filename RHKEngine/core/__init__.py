"""
Core of the report engine: category catalogue, records and the composer.
"""

from .categories import CategoryNotFound, CategoryRegistry, RHKCategory, category_registry, get_category
from .composer import ReportComposer, ReportDocument, display_title
from .models import AnalysisResult, ReportData, Section, StudentGrade, TeacherProfile

__all__ = [
    "CategoryNotFound",
    "CategoryRegistry",
    "RHKCategory",
    "category_registry",
    "get_category",
    "ReportComposer",
    "ReportDocument",
    "display_title",
    "AnalysisResult",
    "ReportData",
    "Section",
    "StudentGrade",
    "TeacherProfile",
]
