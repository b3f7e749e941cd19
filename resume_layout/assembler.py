import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from .blocks import ALIGN_CENTER, BlockRenderer
from .geometry import A4_GEOMETRY, COLOR_SECONDARY, PageGeometry
from .measure import Measurer, ReportLabMeasurer
from .model import ResumeDocument, file_stem
from .pdf import render_pdf
from .sections import CANONICAL_ORDER, compose_sections, resolve_section_order
from .state import PageState
from .surface import LayoutDocument, TextRun

logger = logging.getLogger(__name__)

FOOTER_TEMPLATE = "Page {index} of {count}"


class DocumentGenerationError(RuntimeError):
    """The one failure an export surfaces; the cause is chained."""


@dataclass(frozen=True)
class LayoutOptions:
    section_order: Sequence[str] = CANONICAL_ORDER
    strict_line_breaks: bool = False
    stamp_page_numbers: bool = True


def default_measurer(geometry: PageGeometry = A4_GEOMETRY) -> Measurer:
    return ReportLabMeasurer(geometry.spacing.line_height)


# ---------------------------------------------------------------------------
# PHASE 1: LAYOUT
# ---------------------------------------------------------------------------

def draw_header(r: BlockRenderer, doc: ResumeDocument) -> float:
    """Name, contact line and divider rule."""
    geometry = r.geometry
    fonts, spacing, left = geometry.fonts, geometry.spacing, geometry.margins.left

    total = r.draw_text(doc.name.upper(), left, fonts.name, align=ALIGN_CENTER)
    r.state.advance(spacing.after_name)
    total += spacing.after_name

    contact_line = doc.contact.line()
    if contact_line:
        total += r.draw_text(contact_line, left, fonts.contact, align=ALIGN_CENTER)
        r.state.advance(spacing.after_contact)
        total += spacing.after_contact

    r.draw_rule(left + spacing.divider_inset, geometry.content_right - spacing.divider_inset, line_width=0.4)
    r.state.advance(spacing.after_divider)
    return total + spacing.after_divider


def layout_resume(
    doc: ResumeDocument,
    options: Optional[LayoutOptions] = None,
    geometry: PageGeometry = A4_GEOMETRY,
    measurer: Optional[Measurer] = None,
) -> LayoutDocument:
    """Lay the résumé out onto pages. Pure: same inputs give the same pages."""
    options = options or LayoutOptions()
    order = resolve_section_order(options.section_order)
    measurer = measurer or default_measurer(geometry)

    surface = LayoutDocument(
        page_width=geometry.page_width,
        page_height=geometry.page_height,
        title=f"{doc.name} - Resume",
        author=doc.name,
    )
    state = PageState(geometry, surface, cursor_y=geometry.spacing.name_from_top)
    renderer = BlockRenderer(state, measurer, strict_line_breaks=options.strict_line_breaks)

    draw_header(renderer, doc)
    compose_sections(renderer, doc, order)
    return surface


# ---------------------------------------------------------------------------
# PHASE 2: PAGE NUMBERS
# ---------------------------------------------------------------------------

def stamp_page_numbers(
    layout: LayoutDocument,
    geometry: PageGeometry = A4_GEOMETRY,
    measurer: Optional[Measurer] = None,
) -> int:
    """Add "Page i of n" footers once the page count is final.

    Single-page documents are left unstamped. Returns the number of pages stamped.
    """
    count = layout.page_count
    if count <= 1 or layout.stamped:
        return 0
    measurer = measurer or default_measurer(geometry)
    font = geometry.fonts.footer
    y = geometry.page_height - geometry.spacing.footer_from_bottom

    for page in layout.pages:
        text = FOOTER_TEMPLATE.format(index=page.number, count=count)
        width = measurer.text_width(text, font.size, font.weight)
        x = geometry.page_width - geometry.margins.right - width
        page.ops.append(TextRun(x, y, text, font.size, font.weight, COLOR_SECONDARY))
    layout.stamped = True
    return count


def build_document(
    doc: ResumeDocument,
    options: Optional[LayoutOptions] = None,
    geometry: PageGeometry = A4_GEOMETRY,
    measurer: Optional[Measurer] = None,
) -> LayoutDocument:
    options = options or LayoutOptions()
    measurer = measurer or default_measurer(geometry)
    layout = layout_resume(doc, options, geometry, measurer)
    if options.stamp_page_numbers:
        stamp_page_numbers(layout, geometry, measurer)
    return layout


# ---------------------------------------------------------------------------
# EXPORT
# ---------------------------------------------------------------------------

def pdf_filename(name: str) -> str:
    return f"{file_stem(name)}_Resume.pdf"


def export_pdf(
    doc: ResumeDocument,
    options: Optional[LayoutOptions] = None,
    geometry: PageGeometry = A4_GEOMETRY,
    measurer: Optional[Measurer] = None,
) -> bytes:
    """Render ``doc`` to PDF bytes. Any failure aborts the whole render."""
    started = time.perf_counter()
    try:
        layout = build_document(doc, options, geometry, measurer)
        pdf_bytes = render_pdf(layout)
    except Exception as exc:
        logger.exception("PDF generation failed for %r", doc.name)
        raise DocumentGenerationError("Document generation failed. Please try again.") from exc

    logger.debug(
        "Rendered %s: %d page(s), %d bytes in %.1f ms",
        pdf_filename(doc.name), layout.page_count, len(pdf_bytes),
        (time.perf_counter() - started) * 1000,
    )
    return pdf_bytes
