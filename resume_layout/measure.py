from typing import List, NamedTuple

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from .geometry import PT_TO_MM, WEIGHT_BOLD

# ---------------------------------------------------------------------------
# FONTS
# ---------------------------------------------------------------------------

FONT_REGULAR = "Helvetica"
FONT_BOLD    = "Helvetica-Bold"


def font_for(weight: str) -> str:
    return FONT_BOLD if weight == WEIGHT_BOLD else FONT_REGULAR


class Line(NamedTuple):
    text: str
    width: float  # mm


# ---------------------------------------------------------------------------
# MEASUREMENT PROVIDERS
# ---------------------------------------------------------------------------

class Measurer:
    """Word-wraps text against a width budget.

    Subclasses only provide ``text_width``; wrapping is shared so every provider
    breaks lines the same way.
    """

    def __init__(self, line_height_multiplier: float = 1.25):
        self.line_height_multiplier = line_height_multiplier

    def text_width(self, text: str, font_size: float, weight: str) -> float:
        raise NotImplementedError

    def line_height(self, font_size: float) -> float:
        return font_size * self.line_height_multiplier * PT_TO_MM

    def measure(self, text: str, font_size: float, weight: str, max_width: float) -> List[Line]:
        """Wrap ``text`` into lines no wider than ``max_width`` mm.

        Explicit newlines start a new line. A single word wider than the budget is
        split between characters. Empty text still yields one (empty) line.
        """
        lines: List[Line] = []
        for paragraph in text.split("\n"):
            lines.extend(self._wrap_paragraph(paragraph, font_size, weight, max_width))
        return lines

    def _wrap_paragraph(self, paragraph: str, size: float, weight: str, max_width: float) -> List[Line]:
        words = paragraph.split()
        if not words:
            return [Line("", 0.0)]

        space_w = self.text_width(" ", size, weight)
        lines: List[Line] = []
        current = ""
        current_w = 0.0

        for word in words:
            w = self.text_width(word, size, weight)
            if w > max_width:
                if current:
                    lines.append(Line(current, current_w))
                    current, current_w = "", 0.0
                pieces = self._split_word(word, size, weight, max_width)
                lines.extend(pieces[:-1])
                current, current_w = pieces[-1].text, pieces[-1].width
                continue
            candidate_w = current_w + space_w + w if current else w
            if current and candidate_w > max_width:
                lines.append(Line(current, current_w))
                current, current_w = word, w
            elif current:
                current, current_w = f"{current} {word}", candidate_w
            else:
                current, current_w = word, w

        if current:
            lines.append(Line(current, current_w))
        return lines

    def _split_word(self, word: str, size: float, weight: str, max_width: float) -> List[Line]:
        pieces: List[Line] = []
        chunk = ""
        for ch in word:
            candidate = chunk + ch
            if chunk and self.text_width(candidate, size, weight) > max_width:
                pieces.append(Line(chunk, self.text_width(chunk, size, weight)))
                chunk = ch
            else:
                chunk = candidate
        pieces.append(Line(chunk, self.text_width(chunk, size, weight)))
        return pieces


class ReportLabMeasurer(Measurer):
    """Widths from reportlab's built-in AFM metrics for the standard fonts."""

    def text_width(self, text: str, font_size: float, weight: str) -> float:
        return pdfmetrics.stringWidth(text, font_for(weight), font_size) / mm
