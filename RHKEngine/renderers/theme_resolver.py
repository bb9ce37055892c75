"""
Theme resolver: category + cover border index -> concrete render tokens.

Colors travel as palette references (`cyan-800`, `white`). The cover border
comes from a fixed family of five variants drawn in neutral grays; a themed
category recolors every gray to the same shade of its own color family while
the border's shape (style, widths, sides, ring) stays as drawn.

Resolution is deterministic. The random border pick lives in
`pick_border_index`, called once per report by the agent.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Tuple

from loguru import logger

NEUTRAL_FAMILY = "gray"

# Tailwind palette subset used by the category themes
PALETTE: Dict[str, Dict[int, str]] = {
    "gray": {
        50: "#f9fafb", 100: "#f3f4f6", 200: "#e5e7eb", 300: "#d1d5db", 400: "#9ca3af",
        500: "#6b7280", 600: "#4b5563", 700: "#374151", 800: "#1f2937", 900: "#111827",
    },
    "cyan": {
        50: "#ecfeff", 100: "#cffafe", 200: "#a5f3fc", 300: "#67e8f9", 400: "#22d3ee",
        500: "#06b6d4", 600: "#0891b2", 700: "#0e7490", 800: "#155e75", 900: "#164e63",
    },
    "indigo": {
        50: "#eef2ff", 100: "#e0e7ff", 200: "#c7d2fe", 300: "#a5b4fc", 400: "#818cf8",
        500: "#6366f1", 600: "#4f46e5", 700: "#4338ca", 800: "#3730a3", 900: "#312e81",
    },
    "rose": {
        50: "#fff1f2", 100: "#ffe4e6", 200: "#fecdd3", 300: "#fda4af", 400: "#fb7185",
        500: "#f43f5e", 600: "#e11d48", 700: "#be123c", 800: "#9f1239", 900: "#881337",
    },
    "emerald": {
        50: "#ecfdf5", 100: "#d1fae5", 200: "#a7f3d0", 300: "#6ee7b7", 400: "#34d399",
        500: "#10b981", 600: "#059669", 700: "#047857", 800: "#065f46", 900: "#064e3b",
    },
    "amber": {
        50: "#fffbeb", 100: "#fef3c7", 200: "#fde68a", 300: "#fcd34d", 400: "#fbbf24",
        500: "#f59e0b", 600: "#d97706", 700: "#b45309", 800: "#92400e", 900: "#78350f",
    },
}

_NAMED_COLORS = {"white": "#ffffff", "black": "#000000"}


def palette_hex(ref: str) -> str:
    """Resolve a palette reference (`rose-600`, `white`, `#abcdef`) to a hex color."""
    if ref.startswith("#"):
        return ref
    if ref in _NAMED_COLORS:
        return _NAMED_COLORS[ref]
    family, _, shade = ref.rpartition("-")
    try:
        return PALETTE[family][int(shade)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown palette reference: {ref}") from None


def recolor(ref: str, family: str) -> str:
    """Swap a neutral reference to `family`, same shade; other refs pass through."""
    prefix = f"{NEUTRAL_FAMILY}-"
    if ref.startswith(prefix):
        return f"{family}-{ref[len(prefix):]}"
    return ref


@dataclass(frozen=True)
class Ring:
    """Outer ring drawn around the cover frame."""

    width: int
    color: str
    offset: int


@dataclass(frozen=True)
class BorderStyle:
    name: str
    style: str  # double | solid | dashed
    width: int
    color: str
    sides: str = "all"  # all | x
    ring: Optional[Ring] = None
    rule_color: str = "gray-800"  # underline under the author name

    def recolored(self, family: str) -> "BorderStyle":
        ring = self.ring
        if ring is not None:
            ring = replace(ring, color=recolor(ring.color, family))
        return replace(
            self,
            color=recolor(self.color, family),
            rule_color=recolor(self.rule_color, family),
            ring=ring,
        )


BORDER_VARIANTS: Tuple[BorderStyle, ...] = (
    BorderStyle("plain-double", "double", 4, "gray-800"),
    BorderStyle("bold-solid", "solid", 8, "gray-900", rule_color="gray-900"),
    BorderStyle("vertical-emphasis", "double", 12, "gray-800", sides="x"),
    BorderStyle(
        "ringed-frame", "solid", 2, "gray-700",
        ring=Ring(width=4, color="gray-300", offset=6), rule_color="gray-700",
    ),
    BorderStyle(
        "technical", "dashed", 2, "gray-600",
        ring=Ring(width=1, color="gray-400", offset=4), rule_color="gray-600",
    ),
)


@dataclass(frozen=True)
class SectionStyle:
    """
    Per-category section presentation.

    container: `plain` (no box), `card` (bordered box), `tinted` (filled panel)
    or `ruled` (left rule).
    """

    title_color: str
    container: str
    bullet: str
    container_color: str


NEUTRAL_SECTION_STYLE = SectionStyle("gray-900", "plain", "•", "gray-200")

SECTION_STYLES: Dict[str, SectionStyle] = {
    "character-education": SectionStyle("cyan-800", "tinted", "★", "cyan-50"),
    "digital-technology": SectionStyle("indigo-800", "card", "▸", "indigo-200"),
    "child-friendly": SectionStyle("rose-700", "tinted", "♥", "rose-50"),
    "religious-moderation": SectionStyle("emerald-800", "ruled", "✓", "emerald-600"),
    "student-assessment": SectionStyle("amber-800", "plain", "•", "amber-200"),
}


@dataclass(frozen=True)
class RenderTokens:
    """Resolved presentation values for one report."""

    category_id: str
    color_family: str
    primary: str
    secondary: str
    accent: str
    bg_gradient: Tuple[str, str]
    header_color: str
    pattern_path: Optional[str]
    border_index: int
    border: BorderStyle
    section_style: SectionStyle

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["bg_gradient"] = list(self.bg_gradient)
        return data


class ThemeResolver:
    """Maps (category, border index) to RenderTokens. No randomness, no I/O."""

    def __init__(
        self,
        variants: Tuple[BorderStyle, ...] = BORDER_VARIANTS,
        section_styles: Optional[Dict[str, SectionStyle]] = None,
    ):
        self.variants = variants
        self.section_styles = SECTION_STYLES if section_styles is None else section_styles

    def resolve(self, category, border_index: int) -> RenderTokens:
        index = border_index % len(self.variants)
        if index != border_index:
            logger.debug(f"border index {border_index} normalized to {index}")
        variant = self.variants[index]
        section_style = self.section_styles.get(category.id, NEUTRAL_SECTION_STYLE)

        theme = category.theme
        if theme is None:
            return RenderTokens(
                category_id=category.id,
                color_family=NEUTRAL_FAMILY,
                primary="gray-800",
                secondary="gray-50",
                accent="gray-600",
                bg_gradient=("gray-50", "white"),
                header_color="gray-700",
                pattern_path=None,
                border_index=index,
                border=variant,
                section_style=section_style,
            )

        return RenderTokens(
            category_id=category.id,
            color_family=theme.color_family,
            primary=theme.primary,
            secondary=theme.secondary,
            accent=theme.accent,
            bg_gradient=tuple(theme.bg_gradient),
            header_color=theme.header_color,
            pattern_path=theme.pattern_path,
            border_index=index,
            border=variant.recolored(theme.color_family),
            section_style=section_style,
        )


def pick_border_index(rng: Optional[random.Random] = None) -> int:
    """Draw a cover border variant index for a new report."""
    return (rng or random.Random()).randrange(len(BORDER_VARIANTS))


__all__ = [
    "PALETTE",
    "palette_hex",
    "recolor",
    "Ring",
    "BorderStyle",
    "BORDER_VARIANTS",
    "SectionStyle",
    "SECTION_STYLES",
    "NEUTRAL_SECTION_STYLE",
    "RenderTokens",
    "ThemeResolver",
    "pick_border_index",
]
