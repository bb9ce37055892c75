"""
Report composer: binds profile, category and analysis payload into an
ordered page sequence.

ReportComposer is the only place that knows the page layout. It never
rejects a payload: contract errors and soft deviations alike become
ValidationWarning records on the resulting document, and rendering goes on
with whatever the payload holds.
"""

from __future__ import annotations

import string
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

from loguru import logger

from ..ir.schema import GRADE_LABELS
from ..ir.validator import AnalysisValidator, ValidationWarning
from ..renderers.table_density import AdaptiveTableDensityCalculator, TableMetrics
from ..renderers.theme_resolver import RenderTokens, ThemeResolver
from ..utils.dates import format_report_date
from .categories import CategoryRegistry, RHKCategory, category_registry
from .models import AnalysisResult, ReportData, TeacherProfile

NARRATIVE_HEADING = "Laporan Pelaksanaan Kinerja"
EVIDENCE_TITLE = "Dokumentasi Kegiatan"
FIGURE_LABEL = "Gambar 1.1"
AUTHOR_LABEL = "Disusun Oleh"
NARRATIVE_SIGNER_ROLE = "Guru Penyusun,"


@dataclass(frozen=True)
class SignatureBlock:
    locality: str
    date_text: str
    role: str
    name: str
    id_number: Optional[str]

    @property
    def id_line(self) -> str:
        return f"NIP. {self.id_number or '-'}"


@dataclass(frozen=True)
class CoverPage:
    cover_title_lines: Tuple[str, ...]
    chosen_title: str
    period: str
    author_label: str
    author_name: str
    id_number: Optional[str]
    unit: str
    locality: str
    year: int
    logo_url: Optional[str] = None
    kind: str = field(default="cover", init=False)


@dataclass(frozen=True)
class SectionBlock:
    letter: str
    title: str
    kind: str
    content: Tuple[str, ...]

    @property
    def heading(self) -> str:
        return f"{self.letter}. {self.title}"


@dataclass(frozen=True)
class NarrativePage:
    heading: str
    activity_type: str
    blocks: Tuple[SectionBlock, ...]
    kind: str = field(default="narrative", init=False)


@dataclass(frozen=True)
class EvidencePage:
    attachment_note: str
    heading: str
    image: Optional[str]
    figure_label: str
    caption: str
    signature: SignatureBlock
    kind: str = field(default="evidence", init=False)


@dataclass(frozen=True)
class RosterRow:
    number: int
    name: str
    grade: str
    grade_label: str
    remark: str


@dataclass(frozen=True)
class RosterPage:
    title: str
    class_name: Optional[str]
    principle: Optional[str]
    columns: Tuple[str, ...]
    rows: Tuple[RosterRow, ...]
    metrics: TableMetrics
    signature: SignatureBlock
    kind: str = field(default="roster", init=False)


Page = Union[CoverPage, NarrativePage, EvidencePage, RosterPage]


@dataclass(frozen=True)
class ReportDocument:
    """A composed report: immutable data, tokens and pages, ready to render."""

    data: ReportData
    tokens: RenderTokens
    pages: Tuple[Page, ...]
    warnings: Tuple[ValidationWarning, ...]
    display_title: str

    @property
    def page_kinds(self) -> List[str]:
        return [page.kind for page in self.pages]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "displayTitle": self.display_title,
            "data": self.data.to_dict(),
            "tokens": self.tokens.to_dict(),
            "pages": [asdict(page) for page in self.pages],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


def display_title(category: RHKCategory, period: str) -> str:
    return f"Report - {category.short_title} - {period}"


def section_letter(index: int) -> str:
    """A, B, ... Z, then AA, AB ... for unusually long payloads."""
    letters = string.ascii_uppercase
    if index < len(letters):
        return letters[index]
    return section_letter(index // len(letters) - 1) + letters[index % len(letters)]


class ReportComposer:
    """
    Builds ReportDocument values.

    Collaborators are injectable so tests can swap the registry or the
    density base layout; all of them are pure. `logo_url` is printed on
    every cover when set.
    """

    def __init__(
        self,
        registry: Optional[CategoryRegistry] = None,
        validator: Optional[AnalysisValidator] = None,
        theme_resolver: Optional[ThemeResolver] = None,
        density_calculator: Optional[AdaptiveTableDensityCalculator] = None,
        logo_url: Optional[str] = None,
    ):
        self.registry = registry or category_registry
        self.validator = validator or AnalysisValidator()
        self.theme_resolver = theme_resolver or ThemeResolver()
        self.density_calculator = density_calculator or AdaptiveTableDensityCalculator()
        self.logo_url = logo_url or None

    def compose(
        self,
        profile: TeacherProfile,
        category_id: str,
        period: str,
        analysis: Union[AnalysisResult, Dict[str, Any]],
        border_index: int,
        report_date: date,
        image: Optional[str] = None,
    ) -> ReportDocument:
        """
        Compose a report.

        Args:
            profile: author identity.
            category_id: registry id; unknown ids raise CategoryNotFound.
            period: reporting period label, e.g. `Juli - Desember 2026`.
            analysis: analyzer payload (wire dict) or an AnalysisResult.
            border_index: cover border variant, drawn once by the caller.
            report_date: signing date.
            image: evidence photo as a data URL; ignored for roster categories.

        Returns:
            ReportDocument: data, render tokens, pages and warnings.
        """
        category = self.registry.lookup(category_id)

        payload = analysis.to_dict() if isinstance(analysis, AnalysisResult) else analysis
        outcome = self.validator.validate(payload, category)
        warnings = outcome.as_warnings()
        for warning in warnings:
            level = "WARNING" if warning.blocking else "INFO"
            logger.log(level, f"[{category.id}] payload: {warning.message}")

        result = analysis if isinstance(analysis, AnalysisResult) else AnalysisResult.from_dict(analysis)
        if category.is_roster and image is not None:
            logger.debug(f"[{category.id}] roster reports carry no image, dropping it")
            image = None

        data = ReportData(
            profile=profile,
            category_id=category.id,
            category_label=category.title,
            period=period,
            analysis=result,
            report_date=format_report_date(report_date),
            border_index=border_index,
            image=image,
        )
        tokens = self.theme_resolver.resolve(category, border_index)

        pages: List[Page] = [self._cover_page(category, data, report_date.year)]
        if result.sections:
            pages.append(self._narrative_page(result))
        if not category.is_roster:
            pages.append(self._evidence_page(data, len(result.sections)))
        if result.has_roster:
            pages.append(self._roster_page(category, data))

        document = ReportDocument(
            data=data,
            tokens=tokens,
            pages=tuple(pages),
            warnings=warnings,
            display_title=display_title(category, period),
        )
        logger.info(
            f"composed '{document.display_title}': pages={document.page_kinds}, "
            f"border={tokens.border.name}, warnings={len(warnings)}"
        )
        return document

    # ======== Pages ========

    def _cover_page(self, category: RHKCategory, data: ReportData, year: int) -> CoverPage:
        profile = data.profile
        return CoverPage(
            cover_title_lines=tuple(line.strip() for line in category.cover_title.split("\n")),
            chosen_title=data.analysis.chosen_title,
            period=data.period,
            author_label=AUTHOR_LABEL,
            author_name=profile.name,
            id_number=profile.id_number,
            unit=profile.unit,
            locality=profile.locality,
            year=year,
            logo_url=self.logo_url,
        )

    def _narrative_page(self, result: AnalysisResult) -> NarrativePage:
        blocks = tuple(
            SectionBlock(
                letter=section_letter(idx),
                title=section.title,
                kind=section.kind,
                content=section.content,
            )
            for idx, section in enumerate(result.sections)
        )
        return NarrativePage(
            heading=NARRATIVE_HEADING,
            activity_type=result.activity_type,
            blocks=blocks,
        )

    def _evidence_page(self, data: ReportData, section_count: int) -> EvidencePage:
        caption = data.analysis.caption
        return EvidencePage(
            attachment_note=f"Lampiran Laporan: {data.analysis.chosen_title}",
            heading=f"{section_letter(section_count)}. {EVIDENCE_TITLE}",
            image=data.image,
            figure_label=FIGURE_LABEL,
            caption=caption,
            signature=self._signature(data, NARRATIVE_SIGNER_ROLE),
        )

    def _roster_page(self, category: RHKCategory, data: ReportData) -> RosterPage:
        result = data.analysis
        rows = tuple(
            RosterRow(
                number=idx,
                name=grade.name,
                grade=grade.grade,
                grade_label=GRADE_LABELS.get(grade.grade, grade.grade),
                remark=grade.remark,
            )
            for idx, grade in enumerate(result.student_grades, start=1)
        )
        template = category.roster_template
        columns = template.columns if template else ("No", "Nama", "Nilai", "Keterangan")
        role = template.signer_role if template else NARRATIVE_SIGNER_ROLE
        return RosterPage(
            title=result.chosen_title,
            class_name=result.class_name,
            principle=result.roster_principle,
            columns=tuple(columns),
            rows=rows,
            metrics=self.density_calculator.table_metrics(len(rows)),
            signature=self._signature(data, role),
        )

    def _signature(self, data: ReportData, role: str) -> SignatureBlock:
        profile = data.profile
        return SignatureBlock(
            locality=profile.locality,
            date_text=data.report_date,
            role=role,
            name=profile.name,
            id_number=profile.id_number,
        )


__all__ = [
    "SignatureBlock",
    "CoverPage",
    "SectionBlock",
    "NarrativePage",
    "EvidencePage",
    "RosterRow",
    "RosterPage",
    "ReportDocument",
    "ReportComposer",
    "display_title",
    "section_letter",
]
