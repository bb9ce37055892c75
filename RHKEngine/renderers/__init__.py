"""
Presentation layer: theme tokens, roster density and the HTML print view.
"""

from .html_renderer import HTMLRenderer
from .table_density import DENSITY_TIERS, AdaptiveTableDensityCalculator, DensityTier, TableLayout, TableMetrics
from .theme_resolver import (
    BORDER_VARIANTS,
    SECTION_STYLES,
    BorderStyle,
    RenderTokens,
    SectionStyle,
    ThemeResolver,
    palette_hex,
    pick_border_index,
)

__all__ = [
    "HTMLRenderer",
    "DENSITY_TIERS",
    "AdaptiveTableDensityCalculator",
    "DensityTier",
    "TableLayout",
    "TableMetrics",
    "BORDER_VARIANTS",
    "SECTION_STYLES",
    "BorderStyle",
    "RenderTokens",
    "SectionStyle",
    "ThemeResolver",
    "palette_hex",
    "pick_border_index",
]
