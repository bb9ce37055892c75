"""
Tests for HTMLRenderer.

Run:
    python -m pytest RHKEngine/renderers/test_html_renderer.py -v
"""

from datetime import date

from RHKEngine.core.composer import ReportComposer
from RHKEngine.core.models import TeacherProfile
from RHKEngine.renderers.html_renderer import HTMLRenderer

PROFILE = TeacherProfile(name="Siti Aminah", unit="MTs Negeri 1 Bandung", locality="Bandung", id_number="1980")


def narrative_payload():
    return {
        "chosenTitle": "Kegiatan Literasi Sekolah",
        "activityType": "Intrakurikuler",
        "caption": "Siswa membaca <b>bersama</b>.",
        "sections": [
            {"title": "Latar Belakang", "kind": "paragraph", "content": ["Literasi & numerasi."]},
            {"title": "Deskripsi Kegiatan", "kind": "paragraph", "content": ["Membaca 15 menit."]},
            {
                "title": "Nilai Karakter (Dimensi Profil Lulusan)",
                "kind": "list",
                "content": ["Bernalar kritis", "Mandiri"],
            },
        ],
    }


def roster_payload(count):
    return {
        "chosenTitle": "Penilaian Sikap Spiritual dan Sosial",
        "activityType": "Intrakurikuler",
        "caption": "Rekap penilaian.",
        "studentGrades": [{"name": f"Siswa {i}", "grade": "good", "remark": "Baik."} for i in range(count)],
        "className": "VII A",
    }


class TestHTMLRenderer:
    """HTMLRenderer.render"""

    def setup_method(self):
        self.composer = ReportComposer()
        self.renderer = HTMLRenderer()

    def compose(self, category_id, payload, border_index=0, image="data:image/png;base64,AAAA"):
        return self.composer.compose(
            PROFILE, category_id, "Juli - Desember 2026", payload, border_index, date(2026, 10, 19), image=image
        )

    def test_one_sheet_per_page(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload()))
        assert html_text.startswith("<!DOCTYPE html>")
        assert html_text.count('<section class="sheet') == 3
        assert "@page { size: A4; margin: 0; }" in html_text
        assert "<title>Report - PPK - Juli - Desember 2026</title>" in html_text

    def test_cover_content(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload()))
        assert "Laporan Pelaksanaan<br>Penguatan Pendidikan Karakter" in html_text
        assert "Periode: Juli - Desember 2026" in html_text
        assert "NIP. 1980" in html_text
        assert '<p class="year">2026</p>' in html_text
        assert '<svg class="cover-pattern"' in html_text

    def test_section_headings_and_list(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload()))
        assert "A. Latar Belakang" in html_text
        assert "C. Nilai Karakter (Dimensi Profil Lulusan)" in html_text
        assert "<li>Bernalar kritis</li><li>Mandiri</li>" in html_text
        assert "D. Dokumentasi Kegiatan" in html_text

    def test_payload_text_is_escaped(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload()))
        assert "Literasi &amp; numerasi." in html_text
        assert "&lt;b&gt;bersama&lt;/b&gt;" in html_text
        assert "<b>bersama</b>" not in html_text

    def test_evidence_image_and_signature(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload()))
        assert '<img src="data:image/png;base64,AAAA"' in html_text
        assert "Bandung, 19 Oktober 2026" in html_text
        assert "Guru Penyusun," in html_text

    def test_evidence_without_image(self):
        html_text = self.renderer.render(self.compose("character-education", narrative_payload(), image=None))
        assert "<img" not in html_text
        assert "Gambar 1.1" in html_text

    def test_border_variants(self):
        vertical = self.renderer.render(self.compose("character-education", narrative_payload(), border_index=2))
        assert "border-left: 12px double #155e75;" in vertical
        ringed = self.renderer.render(self.compose("character-education", narrative_payload(), border_index=3))
        assert "outline-offset: 6px;" in ringed

    def test_roster_density_css(self):
        html_text = self.renderer.render(self.compose("student-assessment", roster_payload(40)))
        assert html_text.count('<section class="sheet') == 2
        assert 'class="sheet roster density-super-dense"' in html_text
        assert ".density-super-dense .roster-table td { font-size: 8px; padding: 0px 6px; line-height: 1.1; }" in html_text
        assert "line-height: 1.05;" in html_text
        assert html_text.count("<tr>") == 41
        assert "Kelas: VII A" in html_text
        assert "Dokumentasi Kegiatan" not in html_text

    def test_rendering_is_deterministic(self):
        document = self.compose("child-friendly", {
            "chosenTitle": "Penyambutan siswa di gerbang madrasah",
            "activityType": "Kokurikuler",
            "caption": "Guru menyambut siswa.",
            "sections": [{"title": "Latar Belakang", "kind": "paragraph", "content": ["Isi."]}],
        })
        assert self.renderer.render(document) == self.renderer.render(document)


class TestCoverLogo:
    def render_cover(self, logo_url):
        composer = ReportComposer(logo_url=logo_url)
        document = composer.compose(
            PROFILE, "character-education", "Juli - Desember 2026", narrative_payload(), 0, date(2026, 10, 19)
        )
        return HTMLRenderer().render(document)

    def test_logo_above_period(self):
        html_text = self.render_cover("https://example.test/logo.png")
        logo_at = html_text.index('<img class="cover-logo" src="https://example.test/logo.png"')
        assert logo_at < html_text.index("Periode: Juli - Desember 2026")

    def test_no_logo_slot_when_unset(self):
        html_text = self.render_cover("")
        assert "cover-logo\" src" not in html_text
        assert "<img" not in html_text
