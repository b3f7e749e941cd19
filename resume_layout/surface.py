"""
Recorded drawing surface.

Layout never talks to reportlab directly: it appends draw ops to pages here, and
``pdf.render_pdf`` replays them afterwards. This is what makes a second pass over
finished pages (page numbering) possible, and lets tests inspect positions.
"""
from dataclasses import dataclass, field
from typing import List, NamedTuple, Union

from .geometry import Color, COLOR_PRIMARY


class TextRun(NamedTuple):
    x: float
    y: float           # baseline, mm from the top edge
    text: str
    font_size: float
    weight: str
    color: Color = COLOR_PRIMARY


class Rule(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    line_width: float
    color: Color = COLOR_PRIMARY


DrawOp = Union[TextRun, Rule]


class BlockRecord(NamedTuple):
    """One ``draw_text`` call as it was placed."""
    text: str
    page: int
    y: float            # cursor before drawing, after any page break
    height: float
    page_break: bool    # a break happened immediately before this block


@dataclass
class Page:
    number: int
    ops: List[DrawOp] = field(default_factory=list)

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if isinstance(op, TextRun)]


@dataclass
class LayoutDocument:
    page_width: float
    page_height: float
    title: str = ""
    author: str = ""
    pages: List[Page] = field(default_factory=list)
    blocks: List[BlockRecord] = field(default_factory=list)
    stamped: bool = False

    def __post_init__(self):
        if not self.pages:
            self.pages.append(Page(1))

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page(self, number: int) -> Page:
        return self.pages[number - 1]

    def add_page(self) -> Page:
        page = Page(len(self.pages) + 1)
        self.pages.append(page)
        return page

    def draw(self, number: int, op: DrawOp) -> None:
        self.page(number).ops.append(op)

    def find_blocks(self, text: str) -> List[BlockRecord]:
        return [b for b in self.blocks if b.text == text]
