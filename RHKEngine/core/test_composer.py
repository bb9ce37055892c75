"""
Tests for ReportComposer.

Run:
    python -m pytest RHKEngine/core/test_composer.py -v
"""

from datetime import date

import pytest

from RHKEngine.core.categories import CATEGORIES, CategoryNotFound, get_category
from RHKEngine.core.composer import (
    CoverPage,
    EvidencePage,
    NarrativePage,
    ReportComposer,
    RosterPage,
    display_title,
    section_letter,
)
from RHKEngine.core.models import AnalysisResult, TeacherProfile

REPORT_DATE = date(2026, 10, 19)
PERIOD = "Juli - Desember 2026"
IMAGE = "data:image/png;base64,iVBORw0KGgo="


def make_profile(id_number="198001012005011001"):
    return TeacherProfile(
        name="Siti Aminah",
        unit="MTs Negeri 1 Bandung",
        locality="Bandung",
        id_number=id_number,
    )


def payload_for(category):
    """Contract-valid payload built from the category template."""
    payload = {
        "chosenTitle": category.candidate_titles[0],
        "activityType": "Kokurikuler",
        "caption": "Bukti fisik pelaksanaan kegiatan.",
    }
    if category.is_roster:
        payload["studentGrades"] = [
            {"name": "Ahmad", "grade": "excellent", "remark": "Sangat aktif."},
            {"name": "Budi", "grade": "fair", "remark": "Perlu latihan."},
        ]
        payload["className"] = "VII A"
    else:
        payload["sections"] = [
            {
                "title": section.title,
                "kind": section.kind,
                "content": ["Isi bagian."] if section.kind == "paragraph" else ["Butir satu", "Butir dua"],
            }
            for section in category.section_template
        ]
    return payload


class TestReportComposer:
    """ReportComposer.compose"""

    def setup_method(self):
        self.composer = ReportComposer()
        self.profile = make_profile()

    def compose(self, category_id, payload, border_index=0, image=IMAGE):
        return self.composer.compose(
            self.profile, category_id, PERIOD, payload, border_index, REPORT_DATE, image=image
        )

    def test_scenario_character_education(self):
        category = get_category("character-education")
        document = self.compose(category.id, payload_for(category))

        assert document.page_kinds == ["cover", "narrative", "evidence"]
        narrative = document.pages[1]
        assert isinstance(narrative, NarrativePage)
        assert [block.letter for block in narrative.blocks] == ["A", "B", "C"]
        assert [block.kind for block in narrative.blocks] == ["paragraph", "paragraph", "list"]
        assert narrative.blocks[2].content == ("Butir satu", "Butir dua")
        assert document.warnings == ()

    def test_scenario_student_assessment_forty_rows(self):
        category = get_category("student-assessment")
        payload = payload_for(category)
        payload["studentGrades"] = [
            {"name": f"Siswa {i}", "grade": "good", "remark": "Baik."} for i in range(1, 41)
        ]
        document = self.compose(category.id, payload)

        assert document.page_kinds == ["cover", "roster"]
        roster = document.pages[1]
        assert isinstance(roster, RosterPage)
        assert roster.metrics.tier == "super-dense"
        assert len(roster.rows) == 40
        assert roster.rows[0].number == 1
        assert roster.rows[-1].name == "Siswa 40"
        assert document.data.image is None

    def test_unknown_category_raises_before_anything(self):
        class ExplodingValidator:
            def validate(self, payload, category):
                raise AssertionError("validator must not run")

        composer = ReportComposer(validator=ExplodingValidator())
        with pytest.raises(CategoryNotFound):
            composer.compose(self.profile, "sports", PERIOD, {}, 0, REPORT_DATE)

    @pytest.mark.parametrize("category", CATEGORIES, ids=lambda c: c.id)
    def test_page_rules_per_category(self, category):
        document = self.compose(category.id, payload_for(category))
        kinds = document.page_kinds
        assert kinds.count("cover") == 1
        assert kinds[0] == "cover"
        if category.is_roster:
            assert kinds == ["cover", "roster"]
        else:
            assert kinds.count("narrative") == 1
            assert kinds.count("evidence") == 1
            assert "roster" not in kinds
        assert document.warnings == ()

    def test_lettering_follows_payload_order(self):
        category = get_category("digital-technology")
        payload = payload_for(category)
        payload["sections"].reverse()
        document = self.compose(category.id, payload)
        blocks = document.pages[1].blocks
        assert [block.letter for block in blocks] == ["A", "B", "C", "D"]
        assert blocks[0].title == "Dampak terhadap Pembelajaran"
        assert blocks[0].heading == "A. Dampak terhadap Pembelajaran"

    def test_invalid_payload_still_composes_with_warnings(self):
        category = get_category("religious-moderation")
        payload = payload_for(category)
        payload["chosenTitle"] = "Judul karangan sendiri"
        payload["activityType"] = "Harian"
        document = self.compose(category.id, payload)

        assert document.page_kinds == ["cover", "narrative", "evidence"]
        blocking = [w for w in document.warnings if w.blocking]
        soft = [w for w in document.warnings if not w.blocking]
        assert len(blocking) == 1 and "activityType" in blocking[0].message
        assert len(soft) == 1 and "candidate" in soft[0].message
        assert document.pages[0].chosen_title == "Judul karangan sendiri"

    def test_narrative_page_skipped_without_sections(self):
        category = get_category("child-friendly")
        payload = payload_for(category)
        payload["sections"] = []
        document = self.compose(category.id, payload)
        assert document.page_kinds == ["cover", "evidence"]
        assert any(w.blocking for w in document.warnings)

    def test_evidence_page_without_image(self):
        category = get_category("character-education")
        document = self.compose(category.id, payload_for(category), image=None)
        evidence = document.pages[2]
        assert isinstance(evidence, EvidencePage)
        assert evidence.image is None
        assert evidence.heading == "D. Dokumentasi Kegiatan"

    def test_evidence_heading_follows_section_count(self):
        category = get_category("digital-technology")
        document = self.compose(category.id, payload_for(category))
        assert document.pages[2].heading == "E. Dokumentasi Kegiatan"

    def test_cover_and_signature(self):
        category = get_category("character-education")
        document = self.compose(category.id, payload_for(category))
        cover = document.pages[0]
        assert isinstance(cover, CoverPage)
        assert cover.cover_title_lines == ("Laporan Pelaksanaan", "Penguatan Pendidikan Karakter")
        assert cover.period == PERIOD
        assert cover.author_name == "Siti Aminah"
        assert cover.year == 2026

        signature = document.pages[2].signature
        assert signature.date_text == "19 Oktober 2026"
        assert signature.locality == "Bandung"
        assert signature.role == "Guru Penyusun,"
        assert signature.id_line == "NIP. 198001012005011001"

    def test_missing_id_number_prints_dash(self):
        self.profile = make_profile(id_number=None)
        category = get_category("character-education")
        document = self.compose(category.id, payload_for(category))
        assert document.pages[2].signature.id_line == "NIP. -"

    def test_roster_labels_and_context(self):
        category = get_category("student-assessment")
        document = self.compose(category.id, payload_for(category))
        roster = document.pages[1]
        assert [row.grade_label for row in roster.rows] == ["Sangat Baik", "Cukup"]
        assert roster.class_name == "VII A"
        assert roster.columns[1] == "Nama Peserta Didik"
        assert roster.metrics.tier == "base"

    def test_accepts_analysis_result(self):
        category = get_category("character-education")
        result = AnalysisResult.from_dict(payload_for(category))
        document = self.compose(category.id, result)
        assert document.data.analysis is result
        assert document.warnings == ()

    def test_display_title_and_tokens(self):
        category = get_category("child-friendly")
        document = self.compose(category.id, payload_for(category), border_index=3)
        assert document.display_title == "Report - Ramah Anak - Juli - Desember 2026"
        assert document.tokens.border.name == "ringed-frame"
        assert document.data.border_index == 3

    def test_to_dict(self):
        category = get_category("student-assessment")
        data = self.compose(category.id, payload_for(category)).to_dict()
        assert data["displayTitle"] == display_title(category, PERIOD)
        assert [page["kind"] for page in data["pages"]] == ["cover", "roster"]
        assert data["pages"][1]["metrics"]["tier"] == "base"
        assert data["data"]["hasImage"] is False


class TestSectionLetter:
    def test_letters(self):
        assert [section_letter(i) for i in range(4)] == ["A", "B", "C", "D"]
        assert section_letter(25) == "Z"
        assert section_letter(26) == "AA"
        assert section_letter(27) == "AB"
