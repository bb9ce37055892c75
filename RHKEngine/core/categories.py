"""
Report category catalogue.

Each category is a closed, static record: its labels, the controlled
vocabulary of activity titles the analyzer must pick from, a visual theme,
and either a section template (narrative reports) or a roster template
(grade tables). Categories are plain data; the composer branches on `mode`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from ..ir.schema import SECTION_KIND_LIST, SECTION_KIND_PARAGRAPH

MODE_NARRATIVE = "narrative"
MODE_ROSTER = "roster"

CHARACTER_EDUCATION = "character-education"
DIGITAL_TECHNOLOGY = "digital-technology"
CHILD_FRIENDLY = "child-friendly"
RELIGIOUS_MODERATION = "religious-moderation"
STUDENT_ASSESSMENT = "student-assessment"


class CategoryNotFound(LookupError):
    """Raised for a category id outside the registry; always a caller defect."""

    def __init__(self, category_id: str):
        super().__init__(f"Unknown report category: {category_id!r}")
        self.category_id = category_id


@dataclass(frozen=True)
class ThemeDescriptor:
    """
    Category theme. Colors are palette references (`<family>-<shade>`);
    `color_family` is the family that replaces neutral grays in cover borders.
    """

    primary: str
    secondary: str
    accent: str
    bg_gradient: Tuple[str, str]
    header_color: str
    pattern_path: str
    color_family: str


@dataclass(frozen=True)
class SectionTemplate:
    title: str
    kind: str


@dataclass(frozen=True)
class RosterTemplate:
    columns: Tuple[str, ...]
    signer_role: str = "Guru Mata Pelajaran,"


@dataclass(frozen=True)
class RHKCategory:
    """A report category; see module docstring."""

    id: str
    title: str
    short_title: str
    description: str
    cover_title: str
    candidate_titles: Tuple[str, ...]
    theme: Optional[ThemeDescriptor]
    mode: str = MODE_NARRATIVE
    section_template: Tuple[SectionTemplate, ...] = ()
    roster_template: Optional[RosterTemplate] = None
    requires_image: bool = True

    @property
    def is_roster(self) -> bool:
        return self.mode == MODE_ROSTER

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "shortTitle": self.short_title,
            "description": self.description,
            "coverTitle": self.cover_title,
            "mode": self.mode,
            "requiresImage": self.requires_image,
            "candidateTitles": list(self.candidate_titles),
        }


def _p(title: str) -> SectionTemplate:
    return SectionTemplate(title, SECTION_KIND_PARAGRAPH)


def _l(title: str) -> SectionTemplate:
    return SectionTemplate(title, SECTION_KIND_LIST)


CATEGORIES: Tuple[RHKCategory, ...] = (
    RHKCategory(
        id=CHARACTER_EDUCATION,
        title="Penguatan Pendidikan Karakter",
        short_title="PPK",
        description="Laporan pembiasaan karakter, kedisiplinan, dan budaya positif sekolah.",
        cover_title="Laporan Pelaksanaan\nPenguatan Pendidikan Karakter",
        candidate_titles=(
            "Pelaksanaan Upacara Bendera / Apel Pagi",
            "Pembiasaan 5S (Senyum, Salam, Sapa, Sopan, Santun)",
            "Kegiatan Gotong Royong / Jumat Bersih",
            "Pelaksanaan Sholat Dhuha / Ibadah Berjamaah",
            "Penerapan Budaya Antri dan Disiplin",
            "Kegiatan Literasi Sekolah",
            "Pembinaan Wali Kelas terhadap Siswa",
            "Kegiatan Kepramukaan",
            "Peringatan Hari Besar Nasional",
            "Kampanye Kebersihan dan Lingkungan Hidup (Adiwiyata)",
            "Penyelesaian Masalah Siswa (Restitusi)",
            "Kegiatan Sosial / Infaq Jumat",
        ),
        theme=ThemeDescriptor(
            primary="cyan-800",
            secondary="cyan-50",
            accent="cyan-600",
            bg_gradient=("cyan-50", "white"),
            header_color="cyan-700",
            # concentric ripples
            pattern_path=(
                "M12 2a10 10 0 1 0 10 10A10 10 0 0 0 12 2zm0 18a8 8 0 1 1 8-8 8 8 0 0 1-8 8z"
                "m0-14a6 6 0 1 0 6 6 6 6 0 0 0-6-6zm0 10a4 4 0 1 1 4-4 4 4 0 0 1-4 4z"
            ),
            color_family="cyan",
        ),
        section_template=(
            _p("Latar Belakang"),
            _p("Deskripsi Kegiatan"),
            _l("Nilai Karakter (Dimensi Profil Lulusan)"),
        ),
    ),
    RHKCategory(
        id=DIGITAL_TECHNOLOGY,
        title="Teknologi Digital",
        short_title="Teknologi Digital",
        description="Pembuatan dan pemanfaatan teknologi digital dalam pembelajaran.",
        cover_title="Laporan Pemanfaatan\nTeknologi Digital Pembelajaran",
        candidate_titles=(
            "Membuat media pembelajaran berbasis video/animasi",
            "Membuat slide presentasi interaktif (Canva/PPT)",
            "Melaksanakan kuis pembelajaran digital (Quizizz/Kahoot)",
            "Menggunakan Google Classroom/LMS untuk materi",
            "Pemanfaatan Smart TV/Proyektor dalam pembelajaran",
            "Membuat konten edukasi di media sosial sekolah",
            "Pengelolaan data nilai siswa berbasis aplikasi (e-Rapor)",
            "Melaksanakan asesmen berbasis komputer/smartphone",
            "Pelatihan literasi digital bagi siswa",
            "Pembuatan E-Modul atau bahan ajar digital",
        ),
        theme=ThemeDescriptor(
            primary="indigo-800",
            secondary="indigo-50",
            accent="indigo-600",
            bg_gradient=("indigo-50", "white"),
            header_color="indigo-700",
            # grid nodes
            pattern_path=(
                "M4 4h4v4H4zm6 0h4v4h-4zm6 0h4v4h-4zM4 10h4v4H4zm6 0h4v4h-4zm6 0h4v4h-4z"
                "M4 16h4v4H4zm6 0h4v4h-4zm6 0h4v4h-4z"
            ),
            color_family="indigo",
        ),
        section_template=(
            _p("Latar Belakang"),
            _p("Deskripsi Pemanfaatan Teknologi"),
            _l("Perangkat dan Aplikasi Digital"),
            _l("Dampak terhadap Pembelajaran"),
        ),
    ),
    RHKCategory(
        id=CHILD_FRIENDLY,
        title="Madrasah Ramah Anak",
        short_title="Ramah Anak",
        description="Pelaksanaan layanan ramah anak, anti-bullying, dan inklusivitas.",
        cover_title="Laporan Pelaksanaan\nLayanan Madrasah Ramah Anak",
        candidate_titles=(
            "Penyambutan siswa dengan 5S (Senyum, Salam, Sapa, Sopan, Santun)",
            "Sosialisasi pencegahan perundungan (Anti-Bullying)",
            "Layanan konseling individu yang ramah anak",
            "Deklarasi Sekolah/Madrasah Ramah Anak",
            "Penciptaan lingkungan kelas yang inklusif dan aman",
            "Pengawasan kantin sehat dan higienis",
            "Pemanfaatan taman sekolah untuk pembelajaran",
            "Pelaksanaan kegiatan permainan tradisional",
            "Penyediaan fasilitas yang aksesibel bagi siswa inklusi",
            "Kampanye sekolah sehat dan bebas asap rokok",
        ),
        theme=ThemeDescriptor(
            primary="rose-800",
            secondary="rose-50",
            accent="rose-600",
            bg_gradient=("rose-50", "white"),
            header_color="rose-600",
            # heart
            pattern_path=(
                "M12 21.35l-1.45-1.32C5.4 15.36 2 12.28 2 8.5 2 5.42 4.42 3 7.5 3"
                "c1.74 0 3.41.81 4.5 2.09C13.09 3.81 14.76 3 16.5 3 19.58 3 22 5.42 22 8.5"
                "c0 3.78-3.4 6.86-8.55 11.54L12 21.35z"
            ),
            color_family="rose",
        ),
        section_template=(
            _p("Latar Belakang"),
            _p("Deskripsi Layanan"),
            _l("Hak Anak yang Terpenuhi"),
            _l("Rencana Tindak Lanjut"),
        ),
    ),
    RHKCategory(
        id=RELIGIOUS_MODERATION,
        title="Moderasi Beragama",
        short_title="Moderasi Beragama",
        description="Penguatan nilai toleransi, kebangsaan, dan moderasi beragama.",
        cover_title="Laporan Pelaksanaan\nPenguatan Moderasi Beragama",
        candidate_titles=(
            "Melaksanakan kegiatan peringatan hari besar keagamaan",
            "Menanamkan nilai toleransi (Tasamuh) dalam pembelajaran",
            "Melaksanakan pembiasaan sholat berjamaah/ibadah bersama",
            "Kegiatan bakti sosial lintas agama atau kemasyarakatan",
            "Diskusi kelas tentang keberagaman dan kebangsaan",
            "Pencegahan radikalisme dan ekstremisme di sekolah",
            "Kampanye cinta tanah air (Hubbul Wathon)",
            "Penerapan prinsip keadilan (I'tidal) dalam interaksi siswa",
            "Kegiatan gotong royong membersihkan lingkungan ibadah",
            "Penguatan profil pelajar Rahmatan lil Alamin",
        ),
        theme=ThemeDescriptor(
            primary="emerald-800",
            secondary="emerald-50",
            accent="emerald-600",
            bg_gradient=("emerald-50", "white"),
            header_color="emerald-700",
            # eight-point star
            pattern_path="M12 2l2.4 7.2h7.6l-6 4.8 2.4 7.2-6-4.8-6 4.8 2.4-7.2-6-4.8h7.6z",
            color_family="emerald",
        ),
        section_template=(
            _p("Latar Belakang"),
            _p("Deskripsi Kegiatan"),
            _l("Nilai Moderasi Beragama"),
        ),
    ),
    RHKCategory(
        id=STUDENT_ASSESSMENT,
        title="Penilaian Peserta Didik",
        short_title="Penilaian Siswa",
        description="Rekap penilaian sikap dan capaian peserta didik dalam satu kelas.",
        cover_title="Laporan Hasil\nPenilaian Peserta Didik",
        candidate_titles=(
            "Penilaian Sikap Spiritual dan Sosial",
            "Penilaian Harian Pengetahuan",
            "Penilaian Keterampilan / Praktik",
            "Asesmen Formatif Pembelajaran",
            "Asesmen Sumatif Akhir Semester",
            "Penilaian Projek Penguatan Profil Pelajar Pancasila",
        ),
        theme=ThemeDescriptor(
            primary="amber-800",
            secondary="amber-50",
            accent="amber-600",
            bg_gradient=("amber-50", "white"),
            header_color="amber-700",
            # ruled sheet
            pattern_path="M5 3h14v18H5zM8 7h8M8 11h8M8 15h5",
            color_family="amber",
        ),
        mode=MODE_ROSTER,
        roster_template=RosterTemplate(
            columns=("No", "Nama Peserta Didik", "Nilai", "Keterangan"),
        ),
        requires_image=False,
    ),
)


class CategoryRegistry:
    """Order-preserving, read-only lookup over the category catalogue."""

    def __init__(self, categories: Tuple[RHKCategory, ...] = CATEGORIES):
        self._by_id: Dict[str, RHKCategory] = {}
        for category in categories:
            if category.id in self._by_id:
                raise ValueError(f"Duplicate category id: {category.id}")
            self._by_id[category.id] = category

    def lookup(self, category_id: str) -> RHKCategory:
        """Return the category or raise CategoryNotFound; there is no default category."""
        try:
            return self._by_id[category_id]
        except (KeyError, TypeError):
            raise CategoryNotFound(category_id) from None

    def all(self) -> Tuple[RHKCategory, ...]:
        return tuple(self._by_id.values())

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._by_id)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def __iter__(self) -> Iterator[RHKCategory]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


category_registry = CategoryRegistry()


def get_category(category_id: str) -> RHKCategory:
    return category_registry.lookup(category_id)


__all__ = [
    "MODE_NARRATIVE",
    "MODE_ROSTER",
    "CHARACTER_EDUCATION",
    "DIGITAL_TECHNOLOGY",
    "CHILD_FRIENDLY",
    "RELIGIOUS_MODERATION",
    "STUDENT_ASSESSMENT",
    "CategoryNotFound",
    "ThemeDescriptor",
    "SectionTemplate",
    "RosterTemplate",
    "RHKCategory",
    "CATEGORIES",
    "CategoryRegistry",
    "category_registry",
    "get_category",
]
