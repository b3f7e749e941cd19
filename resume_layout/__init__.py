from .assembler import (
    DocumentGenerationError,
    LayoutOptions,
    build_document,
    export_pdf,
    layout_resume,
    pdf_filename,
    stamp_page_numbers,
)
from .exporters import docx_filename, export_docx, resume_to_text, text_filename
from .geometry import A4_GEOMETRY, PageGeometry
from .measure import Measurer, ReportLabMeasurer
from .model import InvalidResumeError, ResumeDocument, normalize_certification
from .pdf import count_pages, render_pdf
from .sections import CANONICAL_ORDER, EXPERIENCED_ORDER, FRESHER_ORDER, section_order_for

__version__ = "0.1.0"
