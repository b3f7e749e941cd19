from dataclasses import dataclass, field
from typing import Tuple

# ---------------------------------------------------------------------------
# UNITS
# ---------------------------------------------------------------------------

PT_TO_MM = 0.352778

Color = Tuple[int, int, int]

COLOR_PRIMARY   = (0, 0, 0)
COLOR_SECONDARY = (80, 80, 80)
COLOR_RULE      = (128, 128, 128)

WEIGHT_NORMAL = "normal"
WEIGHT_BOLD   = "bold"


# ---------------------------------------------------------------------------
# DESIGN TOKENS
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Margins:
    top: float = 20.0
    bottom: float = 2.0
    left: float = 10.0
    right: float = 10.0


@dataclass(frozen=True)
class FontSpec:
    size: float
    weight: str = WEIGHT_NORMAL


@dataclass(frozen=True)
class Typography:
    name: FontSpec          = FontSpec(18, WEIGHT_BOLD)
    contact: FontSpec       = FontSpec(10.5)
    section_title: FontSpec = FontSpec(11, WEIGHT_BOLD)
    job_title: FontSpec     = FontSpec(10, WEIGHT_BOLD)
    company: FontSpec       = FontSpec(10)
    year: FontSpec          = FontSpec(10)
    body: FontSpec          = FontSpec(9.5)
    footer: FontSpec        = FontSpec(9)


@dataclass(frozen=True)
class Spacing:
    """Vertical gaps and indents, all in mm except ``line_height``."""
    name_from_top: float          = 15.0
    after_name: float             = 2.0
    after_contact: float          = 3.0
    after_divider: float          = 3.0
    divider_inset: float          = 20.0
    section_before: float         = 3.0
    section_after: float          = 1.5
    title_rule_offset: float      = 3.5
    title_rule_gap: float         = 1.5
    bullet_list: float            = 1.0
    before_bullets: float         = 2.0
    after_subsection: float       = 2.5
    between_education: float      = 3.0
    before_education: float       = 4.0
    between_skills: float         = 2.0
    bullet_indent: float          = 4.0
    date_gap: float               = 4.0
    line_height: float            = 1.25
    footer_from_bottom: float     = 10.0


@dataclass(frozen=True)
class PageGeometry:
    """Immutable page constants, safe to share between renders."""
    page_width: float = 210.0
    page_height: float = 297.0
    margins: Margins = field(default_factory=Margins)
    fonts: Typography = field(default_factory=Typography)
    spacing: Spacing = field(default_factory=Spacing)

    @property
    def content_width(self) -> float:
        return self.page_width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        return self.page_height - self.margins.top - self.margins.bottom

    @property
    def content_bottom(self) -> float:
        return self.margins.top + self.content_height

    @property
    def content_right(self) -> float:
        return self.margins.left + self.content_width

    @property
    def content_center(self) -> float:
        return self.margins.left + self.content_width / 2

    def has_space(self, cursor_y: float, required_height: float) -> bool:
        return cursor_y + required_height <= self.content_bottom


A4_GEOMETRY = PageGeometry()
