from io import BytesIO
from typing import List

from pypdf import PdfReader
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from .geometry import Color
from .measure import font_for
from .surface import LayoutDocument, Rule, TextRun

PDF_SUBJECT = "Professional Resume"
PDF_CREATOR = "Resume Optimizer"


def _rgb(color: Color):
    return tuple(c / 255.0 for c in color)


def render_pdf(layout: LayoutDocument) -> bytes:
    """Replay recorded pages onto a reportlab canvas.

    Layout coordinates are mm from the top-left corner; reportlab wants points
    from the bottom-left, so every y is flipped against the page height.
    """
    buffer = BytesIO()
    height = layout.page_height
    # invariant=1 drops timestamps/ids so identical layouts give identical bytes
    pdf = canvas.Canvas(
        buffer,
        pagesize=(layout.page_width * mm, height * mm),
        pageCompression=1,
        invariant=1,
    )
    pdf.setTitle(layout.title)
    pdf.setAuthor(layout.author)
    pdf.setSubject(PDF_SUBJECT)
    pdf.setCreator(PDF_CREATOR)

    for page in layout.pages:
        for op in page.ops:
            if isinstance(op, TextRun):
                pdf.setFont(font_for(op.weight), op.font_size)
                pdf.setFillColorRGB(*_rgb(op.color))
                pdf.drawString(op.x * mm, (height - op.y) * mm, op.text)
            elif isinstance(op, Rule):
                pdf.setStrokeColorRGB(*_rgb(op.color))
                pdf.setLineWidth(op.line_width * mm)
                pdf.line(op.x1 * mm, (height - op.y1) * mm, op.x2 * mm, (height - op.y2) * mm)
        pdf.showPage()

    pdf.save()
    result = buffer.getvalue()
    buffer.close()
    return result


def count_pages(pdf_bytes: bytes) -> int:
    return len(PdfReader(BytesIO(pdf_bytes)).pages)


def page_texts(pdf_bytes: bytes) -> List[str]:
    """Extracted text per page, mostly for checking what actually got drawn."""
    reader = PdfReader(BytesIO(pdf_bytes))
    return [(page.extract_text() or "") for page in reader.pages]
