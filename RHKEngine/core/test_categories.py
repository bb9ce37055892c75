"""
Tests for the category catalogue.

Run:
    python -m pytest RHKEngine/core/test_categories.py -v
"""

import pytest

from RHKEngine.core.categories import (
    CATEGORIES,
    CategoryNotFound,
    CategoryRegistry,
    MODE_NARRATIVE,
    MODE_ROSTER,
    category_registry,
    get_category,
)
from RHKEngine.ir.schema import SECTION_KINDS
from RHKEngine.renderers.theme_resolver import PALETTE


class TestCategoryRegistry:
    """CategoryRegistry lookup"""

    def setup_method(self):
        self.registry = CategoryRegistry()

    def test_ids_are_ordered(self):
        assert self.registry.ids() == (
            "character-education",
            "digital-technology",
            "child-friendly",
            "religious-moderation",
            "student-assessment",
        )

    def test_lookup_returns_category(self):
        category = self.registry.lookup("child-friendly")
        assert category.short_title == "Ramah Anak"
        assert category.theme.color_family == "rose"

    def test_unknown_id_raises(self):
        with pytest.raises(CategoryNotFound) as exc_info:
            self.registry.lookup("sports")
        assert exc_info.value.category_id == "sports"
        assert isinstance(exc_info.value, LookupError)

    def test_non_string_id_raises(self):
        with pytest.raises(CategoryNotFound):
            self.registry.lookup(None)

    def test_contains_and_len(self):
        assert "digital-technology" in self.registry
        assert "unknown" not in self.registry
        assert len(self.registry) == 5

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            CategoryRegistry(CATEGORIES + (CATEGORIES[0],))

    def test_module_helpers_share_default_registry(self):
        assert get_category("religious-moderation") is category_registry.lookup("religious-moderation")


class TestCategoryData:
    """Catalogue contents"""

    @pytest.mark.parametrize("category", [c for c in CATEGORIES if c.mode == MODE_NARRATIVE], ids=lambda c: c.id)
    def test_narrative_categories(self, category):
        assert 3 <= len(category.section_template) <= 4
        assert category.roster_template is None
        assert category.requires_image
        assert all(section.kind in SECTION_KINDS for section in category.section_template)

    def test_roster_category(self):
        category = get_category("student-assessment")
        assert category.mode == MODE_ROSTER
        assert category.is_roster
        assert category.section_template == ()
        assert category.roster_template.columns == ("No", "Nama Peserta Didik", "Nilai", "Keterangan")
        assert not category.requires_image

    @pytest.mark.parametrize("category", CATEGORIES, ids=lambda c: c.id)
    def test_theme_uses_known_palette(self, category):
        theme = category.theme
        assert theme.color_family in PALETTE
        for ref in (theme.primary, theme.secondary, theme.accent, theme.header_color):
            assert ref.startswith(f"{theme.color_family}-")
        assert theme.pattern_path

    @pytest.mark.parametrize("category", CATEGORIES, ids=lambda c: c.id)
    def test_candidate_titles_are_unique(self, category):
        assert category.candidate_titles
        assert len(set(category.candidate_titles)) == len(category.candidate_titles)

    def test_cover_title_has_line_break(self):
        assert "\n" in get_category("character-education").cover_title

    def test_to_dict(self):
        data = get_category("digital-technology").to_dict()
        assert data["id"] == "digital-technology"
        assert data["mode"] == "narrative"
        assert data["requiresImage"] is True
        assert "Membuat slide presentasi interaktif (Canva/PPT)" in data["candidateTitles"]
