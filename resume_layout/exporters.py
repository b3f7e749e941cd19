"""
Non-paginated exports: plain text and Word.

Both follow the same section order as the PDF but leave pagination to whoever
opens the file.
"""
import logging
from io import BytesIO
from typing import List, Optional, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.shared import Mm, Pt, RGBColor

from .assembler import DocumentGenerationError
from .blocks import BULLET_PREFIX
from .geometry import A4_GEOMETRY, PageGeometry
from .model import ResumeDocument, file_stem
from .sections import (
    CERTIFICATIONS, EDUCATION, EXPERIENCE, PROJECTS, SECTION_TITLES, SKILLS, SUMMARY,
    has_content, resolve_section_order,
)

logger = logging.getLogger(__name__)


def docx_filename(name: str) -> str:
    return f"{file_stem(name)}_Resume.docx"


def text_filename(name: str) -> str:
    return f"{file_stem(name)}_Resume.txt"


# ---------------------------------------------------------------------------
# PLAIN TEXT EXPORT
# ---------------------------------------------------------------------------

def resume_to_text(doc: ResumeDocument, order: Optional[Sequence[str]] = None) -> str:
    lines: List[str] = [doc.name.upper()]
    contact_line = doc.contact.line()
    if contact_line:
        lines.append(contact_line)

    for section in resolve_section_order(order):
        if not has_content(doc, section):
            continue
        lines.append(f"\n{SECTION_TITLES[section]}")

        if section == SUMMARY:
            lines.append(doc.summary)
        elif section == EXPERIENCE:
            for job in doc.work_experience:
                lines.append(" | ".join(filter(None, [job.role, job.company, job.date_range])))
                lines.extend(f"{BULLET_PREFIX}{b}" for b in job.bullets)
        elif section == EDUCATION:
            for edu in doc.education:
                lines.append(" | ".join(filter(None, [edu.degree, edu.school, edu.date_range])))
        elif section == PROJECTS:
            for project in doc.projects:
                lines.append(project.title)
                lines.extend(f"{BULLET_PREFIX}{b}" for b in project.bullets)
        elif section == SKILLS:
            for group in doc.skills:
                if group.category or group.items:
                    lines.append(f"{group.label}{group.items_text()}")
        elif section == CERTIFICATIONS:
            lines.extend(f"{BULLET_PREFIX}{c.display()}" for c in doc.certifications)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# WORD EXPORT
# ---------------------------------------------------------------------------

def _paragraph(document, text: str = "", size: float = 10, bold: bool = False, align=None, space_after: float = 0):
    p = document.add_paragraph()
    if text:
        run = p.add_run(text)
        run.bold = bold
        run.font.size = Pt(size)
    if align is not None:
        p.alignment = align
    p.paragraph_format.space_after = Pt(space_after)
    return p


def _bullet(document, text: str, size: float):
    p = document.add_paragraph(style="List Bullet")
    run = p.add_run(text)
    run.font.size = Pt(size)
    p.paragraph_format.space_after = Pt(2)
    return p


def _dated_header(document, primary: str, secondary: str, date_range: str, geometry: PageGeometry):
    fonts = geometry.fonts
    p = _paragraph(document, primary, fonts.job_title.size, bold=True)
    if date_range:
        p.paragraph_format.tab_stops.add_tab_stop(Mm(geometry.content_width), WD_TAB_ALIGNMENT.RIGHT)
        run = p.add_run(f"\t{date_range}")
        run.font.size = Pt(fonts.year.size)
    if secondary:
        _paragraph(document, secondary, fonts.company.size)


def build_docx(doc: ResumeDocument, order: Optional[Sequence[str]] = None, geometry: PageGeometry = A4_GEOMETRY):
    fonts = geometry.fonts
    document = Document()

    page = document.sections[0]
    page.page_width, page.page_height = Mm(geometry.page_width), Mm(geometry.page_height)
    page.top_margin, page.bottom_margin = Mm(geometry.margins.top), Mm(max(geometry.margins.bottom, 10))
    page.left_margin, page.right_margin = Mm(geometry.margins.left), Mm(geometry.margins.right)
    document.core_properties.title = f"{doc.name} - Resume"
    document.core_properties.author = doc.name

    _paragraph(document, doc.name.upper(), fonts.name.size, bold=True, align=WD_ALIGN_PARAGRAPH.CENTER, space_after=4)
    contact_line = doc.contact.line()
    if contact_line:
        _paragraph(document, contact_line, fonts.contact.size, align=WD_ALIGN_PARAGRAPH.CENTER, space_after=6)

    for section in resolve_section_order(order):
        if not has_content(doc, section):
            continue
        title = _paragraph(document, SECTION_TITLES[section], fonts.section_title.size, bold=True, space_after=4)
        title.paragraph_format.space_before = Pt(10)
        title.runs[0].font.color.rgb = RGBColor(0, 0, 0)

        if section == SUMMARY:
            _paragraph(document, doc.summary, fonts.body.size)
        elif section == EXPERIENCE:
            for job in doc.work_experience:
                _dated_header(document, job.role, job.company, job.date_range, geometry)
                for bullet in job.bullets:
                    _bullet(document, bullet, fonts.body.size)
        elif section == EDUCATION:
            for edu in doc.education:
                _dated_header(document, edu.degree, edu.school, edu.date_range, geometry)
        elif section == PROJECTS:
            for project in doc.projects:
                _paragraph(document, project.title, fonts.job_title.size, bold=True)
                for bullet in project.bullets:
                    _bullet(document, bullet, fonts.body.size)
        elif section == SKILLS:
            for group in doc.skills:
                if not (group.category or group.items):
                    continue
                p = _paragraph(document, group.label, fonts.body.size, bold=True, space_after=2)
                run = p.add_run(group.items_text())
                run.font.size = Pt(fonts.body.size)
        elif section == CERTIFICATIONS:
            for cert in doc.certifications:
                _bullet(document, cert.display(), fonts.body.size)

    return document


def export_docx(doc: ResumeDocument, order: Optional[Sequence[str]] = None) -> bytes:
    try:
        document = build_docx(doc, order)
        buffer = BytesIO()
        document.save(buffer)
    except Exception as exc:
        logger.exception("Word export failed for %r", doc.name)
        raise DocumentGenerationError("Word export failed. Please try again.") from exc
    return buffer.getvalue()
