"""
Adaptive table density for the roster page.

The roster table must fit one printed A4 page whatever the class size, and
there is no pagination fallback. Density is a step function of the row count:

    rows <= 15   base
    16 - 25      dense
    26 - 32      very-dense
    > 32         super-dense

Each tier is a bundle of scale factors applied to a TableLayout base, plus
the line heights for body rows and the (always tighter) remark column;
table_metrics() turns the pair into concrete pixel values with floors so
text never drops below a legible size.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from loguru import logger


@dataclass
class TableLayout:
    """Base table layout (base tier values, in px)"""
    font_size_header: int = 13  # header font
    font_size_body: int = 12  # name / grade columns
    font_size_description: int = 11  # remark column
    cell_padding: int = 8  # vertical cell padding
    header_padding: int = 10
    min_font_size: int = 7
    min_line_height: float = 1.05


@dataclass(frozen=True)
class DensityTier:
    name: str
    max_rows: Optional[int]  # inclusive upper bound; None for the last tier
    row_font_scale: float
    row_line_height: float
    description_font_scale: float
    description_line_height: float
    cell_padding_scale: float
    header_padding_scale: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DENSITY_TIERS: Tuple[DensityTier, ...] = (
    DensityTier("base", 15, 1.0, 1.4, 0.92, 1.35, 1.0, 1.0),
    DensityTier("dense", 25, 0.9, 1.3, 0.82, 1.25, 0.6, 0.8),
    DensityTier("very-dense", 32, 0.8, 1.2, 0.72, 1.15, 0.3, 0.6),
    DensityTier("super-dense", None, 0.7, 1.1, 0.64, 1.05, 0.05, 0.4),
)


@dataclass(frozen=True)
class TableMetrics:
    """Concrete sizes for one roster table."""
    tier: str
    row_count: int
    font_size_header: int
    font_size_body: int
    font_size_description: int
    row_line_height: float
    description_line_height: float
    cell_padding: int
    header_padding: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AdaptiveTableDensityCalculator:
    """
    Selects a density tier for a roster and derives its table metrics.

    Args:
        layout: base layout the tier scales apply to.
        tiers: ordered tiers, last one unbounded.
    """

    def __init__(
        self,
        layout: Optional[TableLayout] = None,
        tiers: Tuple[DensityTier, ...] = DENSITY_TIERS,
    ):
        if not tiers or tiers[-1].max_rows is not None:
            raise ValueError("the last density tier must be unbounded")
        self.layout = layout or TableLayout()
        self.tiers = tiers

    def select_density(self, row_count: int) -> DensityTier:
        if row_count < 0:
            raise ValueError(f"row count cannot be negative: {row_count}")
        for tier in self.tiers:
            if tier.max_rows is None or row_count <= tier.max_rows:
                return tier
        # unreachable: the last tier is unbounded
        return self.tiers[-1]

    def table_metrics(self, row_count: int) -> TableMetrics:
        tier = self.select_density(row_count)
        layout = self.layout
        metrics = TableMetrics(
            tier=tier.name,
            row_count=row_count,
            font_size_header=self._scaled(layout.font_size_header, tier.row_font_scale, layout.min_font_size),
            font_size_body=self._scaled(layout.font_size_body, tier.row_font_scale, layout.min_font_size),
            font_size_description=self._scaled(
                layout.font_size_description, tier.description_font_scale, layout.min_font_size
            ),
            row_line_height=max(tier.row_line_height, layout.min_line_height),
            description_line_height=max(tier.description_line_height, layout.min_line_height),
            cell_padding=self._scaled(layout.cell_padding, tier.cell_padding_scale, 0),
            header_padding=self._scaled(layout.header_padding, tier.header_padding_scale, 2),
        )
        logger.debug(f"roster of {row_count} rows -> {tier.name} ({metrics.font_size_body}px body)")
        return metrics

    @staticmethod
    def _scaled(value: int, scale: float, minimum: int) -> int:
        return max(minimum, int(round(value * scale)))


__all__ = [
    "TableLayout",
    "DensityTier",
    "DENSITY_TIERS",
    "TableMetrics",
    "AdaptiveTableDensityCalculator",
]
