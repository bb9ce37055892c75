"""
Prompts for the RHK analyzer.

The system prompt fixes tone and output discipline; the user prompt is built
per request from the category contract (candidate titles, section template
or grade table) and the teacher's free-text hints.
"""

from typing import Iterable, Optional

from ..ir.schema import (
    ACTIVITY_TYPES,
    GRADE_LABELS,
    GRADE_VALUES,
    SECTION_KIND_LIST,
    describe_schema,
    response_schema_text,
)

SYSTEM_PROMPT_ANALYSIS = """
Anda adalah asisten administrasi guru di Indonesia yang menyusun Laporan Rencana
Hasil Kerja (RHK) dalam bahasa Indonesia formal dan akademis.

Aturan keluaran:
1. Jawab HANYA dengan satu objek JSON yang sesuai skema yang diberikan, tanpa
   penjelasan, tanpa blok kode markdown.
2. Nilai "chosenTitle" WAJIB disalin persis dari daftar judul RHK yang diberikan.
3. Nilai "activityType" hanya boleh salah satu dari: {activity_types}.
4. Jangan mengarang nama orang, nama sekolah, atau data yang tidak terlihat.
""".strip().format(activity_types=", ".join(ACTIVITY_TYPES))


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def build_analysis_prompt(
    category,
    note: Optional[str] = None,
    roster_names: Optional[Iterable[str]] = None,
    class_name: Optional[str] = None,
) -> str:
    """
    Build the user prompt for one analysis request.

    Args:
        category: RHKCategory being reported.
        note: optional free-text hint from the teacher.
        roster_names: student names, required for roster categories.
        class_name: class label shown on the roster page.

    Returns:
        str: prompt text; the image, when any, travels as a separate part.
    """
    contract = describe_schema(category)
    parts = [f"Kategori laporan: {category.title}.", ""]

    if category.is_roster:
        names = [name for name in (roster_names or []) if name.strip()]
        grade_guide = ", ".join(f"{value} ({GRADE_LABELS[value]})" for value in GRADE_VALUES)
        parts += [
            "Susun rekap penilaian peserta didik berikut.",
            "",
            "Langkah kerja:",
            "1. PILIH SATU judul yang PALING RELEVAN dari daftar RHK berikut:",
            _bullets(contract.candidate_titles),
            f"2. Tentukan jenis kegiatan ({', '.join(ACTIVITY_TYPES)}).",
            f"3. Untuk SETIAP nama, isi satu entri \"studentGrades\" dengan urutan yang sama; "
            f"nilai \"grade\" hanya boleh: {grade_guide}.",
            "4. Tulis \"remark\" berupa satu kalimat deskripsi capaian yang positif dan membangun.",
            "5. Tulis \"rosterPrinciple\" berupa satu kalimat prinsip penilaian yang digunakan.",
            "6. Tulis \"caption\" berupa satu kalimat ringkasan penilaian.",
            "",
            f"Daftar peserta didik ({len(names)} orang):",
            _bullets(names),
        ]
        if class_name:
            parts += ["", f"Kelas: {class_name}. Salin ke \"className\"."]
    else:
        parts += [
            "Saya mengirimkan foto kegiatan guru di sekolah. Analisis foto tersebut secara visual.",
            "",
            "Langkah kerja:",
            "1. Analisis aktivitas yang terlihat.",
            "2. COCOKKAN aktivitas tersebut dengan SATU judul yang PALING RELEVAN dari daftar RHK berikut:",
            _bullets(contract.candidate_titles),
            f"3. Tentukan jenis kegiatan ({', '.join(ACTIVITY_TYPES)}).",
            "4. Isi \"sections\" tepat sesuai urutan dan judul berikut:",
        ]
        for idx, (title, kind) in enumerate(contract.section_template, start=1):
            shape = "2 sampai 4 butir singkat" if kind == SECTION_KIND_LIST else "tepat satu paragraf"
            parts.append(f"   {idx}. \"{title}\" (kind \"{kind}\", {shape})")
        parts.append("5. Tulis \"caption\" berupa satu kalimat keterangan bukti fisik kegiatan.")

    if note:
        parts += ["", f"Catatan dari guru: {note.strip()}"]

    parts += ["", "Skema JSON keluaran:", response_schema_text(category)]
    return "\n".join(parts)


__all__ = ["SYSTEM_PROMPT_ANALYSIS", "build_analysis_prompt"]
