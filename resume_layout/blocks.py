from typing import List, Optional

from .geometry import COLOR_PRIMARY, COLOR_RULE, Color, FontSpec
from .measure import Line, Measurer
from .state import PageState
from .surface import BlockRecord, Rule, TextRun

BULLET_PREFIX = "• "

ALIGN_LEFT   = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT  = "right"


class BlockRenderer:
    """Draws one block at a time at the cursor, breaking pages as needed.

    With ``strict_line_breaks`` off, a block's whole height is checked once before
    drawing and the block is never split. With it on, space is checked per wrapped
    line and long paragraphs continue on the next page.
    """

    def __init__(self, state: PageState, measurer: Measurer, strict_line_breaks: bool = False):
        self.state = state
        self.measurer = measurer
        self.strict_line_breaks = strict_line_breaks

    @property
    def geometry(self):
        return self.state.geometry

    @property
    def last_block(self) -> BlockRecord:
        return self.state.surface.blocks[-1]

    # -----------------------------------------------------------------------
    # measurement
    # -----------------------------------------------------------------------

    def wrap(self, text: str, font: FontSpec, max_width: Optional[float] = None) -> List[Line]:
        if max_width is None:
            max_width = self.geometry.content_width
        return self.measurer.measure(text, font.size, font.weight, max_width)

    def line_height(self, font: FontSpec) -> float:
        return self.measurer.line_height(font.size)

    def text_height(self, text: str, font: FontSpec, max_width: Optional[float] = None) -> float:
        return len(self.wrap(text, font, max_width)) * self.line_height(font)

    def reserve_height(self, text: str, font: FontSpec, max_width: Optional[float] = None) -> float:
        """Height that must fit for ``text`` to start without an immediate break."""
        if self.strict_line_breaks:
            return self.line_height(font)
        return self.text_height(text, font, max_width)

    def bullet_width(self) -> float:
        return self.geometry.content_width - self.geometry.spacing.bullet_indent

    # -----------------------------------------------------------------------
    # pagination
    # -----------------------------------------------------------------------

    def _break_if_needed(self, height: float) -> bool:
        if self.state.has_space(height) or self.state.page_is_empty:
            return False
        self.state.page_break()
        return True

    def ensure_space(self, required: float, minimum: Optional[float] = None) -> bool:
        """Keep a group of blocks together when a fresh page could hold them.

        If ``required`` does not fit here but fits on an empty page, break now.
        Otherwise break only if even ``minimum`` does not fit. Returns True on break.
        """
        if self.state.has_space(required) or self.state.page_is_empty:
            return False
        if required <= self.geometry.content_height:
            self.state.page_break()
            return True
        if minimum is not None and not self.state.has_space(minimum):
            self.state.page_break()
            return True
        return False

    # -----------------------------------------------------------------------
    # blocks
    # -----------------------------------------------------------------------

    def _line_x(self, line: Line, x: float, align: str) -> float:
        if align == ALIGN_CENTER:
            return self.geometry.content_center - line.width / 2
        if align == ALIGN_RIGHT:
            return self.geometry.content_right - line.width
        return x

    def draw_text(
        self,
        text: str,
        x: float,
        font: FontSpec,
        color: Color = COLOR_PRIMARY,
        max_width: Optional[float] = None,
        align: str = ALIGN_LEFT,
        check_space: bool = True,
    ) -> float:
        """Draw wrapped ``text`` with its first baseline at the cursor; return height used.

        ``check_space=False`` skips the break check before the first line, for a block
        whose caller has already placed it.
        """
        lines = self.wrap(text, font, max_width)
        line_h = self.line_height(font)
        total = len(lines) * line_h

        broke = False
        if check_space:
            broke = self._break_if_needed(line_h if self.strict_line_breaks else total)
        self.state.surface.blocks.append(
            BlockRecord(text, self.state.page_index, self.state.cursor_y, total, broke)
        )

        for index, line in enumerate(lines):
            if self.strict_line_breaks and index:
                self._break_if_needed(line_h)
            if self.strict_line_breaks:
                y = self.state.cursor_y
                self.state.advance(line_h)
            else:
                y = self.state.cursor_y + index * line_h
            self.state.draw(TextRun(self._line_x(line, x, align), y, line.text, font.size, font.weight, color))

        if not self.strict_line_breaks:
            self.state.advance(total)
        return total

    def draw_at(
        self,
        text: str,
        page: int,
        y: float,
        font: FontSpec,
        color: Color = COLOR_PRIMARY,
        align: str = ALIGN_RIGHT,
    ) -> None:
        """Place a single unwrapped run without moving the cursor (e.g. a date column)."""
        width = self.measurer.text_width(text, font.size, font.weight)
        x = self._line_x(Line(text, width), self.geometry.margins.left, align)
        self.state.surface.draw(page, TextRun(x, y, text, font.size, font.weight, color))

    def draw_rule(
        self,
        x1: float,
        x2: float,
        y: Optional[float] = None,
        line_width: float = 0.4,
        color: Color = COLOR_PRIMARY,
    ) -> None:
        if y is None:
            y = self.state.cursor_y
        self.state.draw(Rule(x1, y, x2, y, line_width, color))

    def draw_section_title(self, title: str) -> float:
        spacing = self.geometry.spacing
        left = self.geometry.margins.left

        self.state.advance(spacing.section_before)
        height = self.draw_text(title.upper(), left, self.geometry.fonts.section_title)

        rule_y = self.state.cursor_y - spacing.title_rule_offset
        self.draw_rule(left, self.geometry.content_right, rule_y, line_width=0.3, color=COLOR_RULE)

        self.state.advance(spacing.title_rule_gap + spacing.section_after)
        return spacing.section_before + height + spacing.title_rule_gap + spacing.section_after

    def draw_bullet(self, text: str, font: Optional[FontSpec] = None) -> float:
        font = font or self.geometry.fonts.body
        x = self.geometry.margins.left + self.geometry.spacing.bullet_indent
        return self.draw_text(BULLET_PREFIX + text, x, font, max_width=self.bullet_width())

    def bullet_reserve(self, text: str) -> float:
        return self.reserve_height(BULLET_PREFIX + text, self.geometry.fonts.body, self.bullet_width())

    def draw_inline_pair(self, label: str, value: str, label_font: FontSpec, value_font: FontSpec) -> float:
        """Draw ``label`` then ``value`` on the same visual line, value wrapping after it.

        The label is drawn first, the cursor is moved back by its height, and the
        value is drawn offset by the label's measured width.
        """
        left = self.geometry.margins.left
        label_w = self.measurer.text_width(label, label_font.size, label_font.weight)
        # a label wider than the line still leaves the value a usable column
        value_width = max(self.geometry.content_width - label_w, self.geometry.content_width / 3)

        label_h = self.text_height(label, label_font)
        value_h = self.text_height(value, value_font, value_width) if value else 0.0
        pair_h = max(label_h, value_h)
        if self.strict_line_breaks:
            self.ensure_space(pair_h, self.line_height(label_font))
        else:
            # a pair taller than a page starts on a fresh one
            self.ensure_space(pair_h, pair_h)

        label_h = self.draw_text(label, left, label_font)
        if not value:
            return label_h

        # the pair is placed; the value must not break away from its label
        self.state.cursor_y -= label_h
        value_h = self.draw_text(value, left + label_w, value_font, max_width=value_width, check_space=False)
        if label_h > value_h:
            self.state.advance(label_h - value_h)
        return max(label_h, value_h)
