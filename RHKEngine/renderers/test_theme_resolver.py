"""
Tests for ThemeResolver.

Run:
    python -m pytest RHKEngine/renderers/test_theme_resolver.py -v
"""

import random
from dataclasses import replace

import pytest

from RHKEngine.core.categories import get_category
from RHKEngine.renderers.theme_resolver import (
    BORDER_VARIANTS,
    NEUTRAL_SECTION_STYLE,
    SECTION_STYLES,
    ThemeResolver,
    palette_hex,
    pick_border_index,
    recolor,
)


class TestPalette:
    def test_palette_reference(self):
        assert palette_hex("cyan-800") == "#155e75"
        assert palette_hex("white") == "#ffffff"
        assert palette_hex("#123456") == "#123456"

    def test_unknown_reference(self):
        with pytest.raises(ValueError):
            palette_hex("teal-500")
        with pytest.raises(ValueError):
            palette_hex("cyan-dark")

    def test_recolor_only_touches_neutral(self):
        assert recolor("gray-800", "rose") == "rose-800"
        assert recolor("amber-300", "rose") == "amber-300"


class TestThemeResolver:
    """ThemeResolver.resolve"""

    def setup_method(self):
        self.resolver = ThemeResolver()
        self.category = get_category("child-friendly")

    def test_variant_order(self):
        names = [variant.name for variant in BORDER_VARIANTS]
        assert names == ["plain-double", "bold-solid", "vertical-emphasis", "ringed-frame", "technical"]

    @pytest.mark.parametrize("index", range(5))
    def test_themed_border_keeps_shape(self, index):
        tokens = self.resolver.resolve(self.category, index)
        neutral = BORDER_VARIANTS[index]
        assert tokens.border.style == neutral.style
        assert tokens.border.width == neutral.width
        assert tokens.border.sides == neutral.sides
        assert (tokens.border.ring is None) == (neutral.ring is None)
        assert tokens.border.color.startswith("rose-")
        assert tokens.border.color.split("-")[1] == neutral.color.split("-")[1]

    def test_ring_is_recolored(self):
        tokens = self.resolver.resolve(self.category, 3)
        assert tokens.border.ring.color == "rose-300"
        assert tokens.border.ring.offset == BORDER_VARIANTS[3].ring.offset

    def test_no_neutral_left_when_themed(self):
        tokens = self.resolver.resolve(get_category("digital-technology"), 4)
        refs = [tokens.border.color, tokens.border.rule_color, tokens.border.ring.color]
        assert not any(ref.startswith("gray-") for ref in refs)

    def test_without_theme_returns_neutral_variant(self):
        unthemed = replace(self.category, theme=None)
        tokens = self.resolver.resolve(unthemed, 2)
        assert tokens.border == BORDER_VARIANTS[2]
        assert tokens.color_family == "gray"
        assert tokens.pattern_path is None

    def test_index_normalized(self):
        assert self.resolver.resolve(self.category, 7) == self.resolver.resolve(self.category, 2)
        assert self.resolver.resolve(self.category, -1).border.name == "technical"
        assert self.resolver.resolve(self.category, 12).border_index == 2

    def test_resolution_is_idempotent(self):
        first = self.resolver.resolve(self.category, 1)
        second = self.resolver.resolve(self.category, 1)
        assert first == second

    def test_theme_colors_passed_through(self):
        tokens = self.resolver.resolve(get_category("religious-moderation"), 0)
        assert tokens.primary == "emerald-800"
        assert tokens.bg_gradient == ("emerald-50", "white")
        assert tokens.pattern_path.startswith("M12")

    def test_section_style_from_table(self):
        tokens = self.resolver.resolve(self.category, 0)
        assert tokens.section_style == SECTION_STYLES["child-friendly"]
        assert tokens.section_style.bullet == "♥"

    def test_unknown_category_gets_neutral_section_style(self):
        other = replace(self.category, id="custom")
        assert self.resolver.resolve(other, 0).section_style == NEUTRAL_SECTION_STYLE

    def test_tokens_to_dict(self):
        data = self.resolver.resolve(self.category, 3).to_dict()
        assert data["border"]["name"] == "ringed-frame"
        assert data["border"]["ring"]["color"] == "rose-300"
        assert data["bg_gradient"] == ["rose-50", "white"]


class TestPickBorderIndex:
    def test_seeded_pick_is_reproducible(self):
        assert pick_border_index(random.Random(7)) == pick_border_index(random.Random(7))

    def test_pick_in_range(self):
        rng = random.Random(1)
        picks = {pick_border_index(rng) for _ in range(200)}
        assert picks == set(range(len(BORDER_VARIANTS)))
