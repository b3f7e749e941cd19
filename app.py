import json
import logging
import os
import re
from typing import Any, Dict, Optional

import streamlit as st

from resume_layout import (
    DocumentGenerationError,
    LayoutOptions,
    ResumeDocument,
    count_pages,
    docx_filename,
    export_docx,
    export_pdf,
    pdf_filename,
    resume_to_text,
    section_order_for,
    text_filename,
)
from resume_layout.sections import (
    CERTIFICATIONS, EDUCATION, EXPERIENCE, PROJECTS, SECTION_ORDERS, SECTION_TITLES, SKILLS, SUMMARY,
    has_content,
)

st.set_page_config(page_title="Resume Export", page_icon="📄", layout="wide")

logging.basicConfig(
    level=os.getenv("RESUME_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("resume_export_app")

# ---------------------------------------------------------------------------
# CONFIG
# ---------------------------------------------------------------------------

ORDER_LABELS = {
    "canonical":   "Canonical (Experience first, export default)",
    "experienced": "Experienced (summary first, education last)",
    "fresher":     "Fresher (education first)",
}


def get_default_order() -> str:
    configured = os.getenv("RESUME_SECTION_ORDER", "canonical").strip().lower()
    return configured if configured in SECTION_ORDERS else "canonical"


def get_default_strict() -> bool:
    return os.getenv("RESUME_STRICT_LINE_BREAKS", "").strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# INPUT
# ---------------------------------------------------------------------------

def extract_json_object(text: str) -> Dict[str, Any]:
    """Parse optimiser output that may be wrapped in code fences or prose."""
    text = re.sub(r"^```(?:json)?\s*", "", text.strip())
    text = re.sub(r"\s*```$", "", text.strip())
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1 or end <= start:
            raise ValueError("Input is not valid resume JSON.")
        return json.loads(text[start:end + 1])


def load_resume(raw: str) -> Optional[ResumeDocument]:
    try:
        return ResumeDocument.from_dict(extract_json_object(raw))
    except ValueError as exc:
        logger.info("Rejected resume input: %s", exc)
        st.error(f"Could not read resume: {exc}")
        return None


# ---------------------------------------------------------------------------
# STREAMLIT PREVIEW
# ---------------------------------------------------------------------------

def render_preview(doc: ResumeDocument, order):
    st.markdown(f"## {doc.name.upper()}")
    if doc.contact.line():
        st.caption(doc.contact.line())

    for section in order:
        if not has_content(doc, section):
            continue
        st.markdown(f"**{SECTION_TITLES[section]}**")
        if section == SUMMARY:
            st.markdown(doc.summary)
        elif section == EXPERIENCE:
            for job in doc.work_experience:
                st.markdown(
                    f"**{job.role}** &nbsp;&nbsp; {job.company} &nbsp;&nbsp; "
                    f"<span style='color:gray;font-size:0.85em'>{job.date_range}</span>",
                    unsafe_allow_html=True,
                )
                for b in job.bullets:
                    st.markdown(f"- {b}")
        elif section == EDUCATION:
            for edu in doc.education:
                st.markdown(f"**{edu.degree}**, {edu.school} &nbsp; *{edu.date_range}*", unsafe_allow_html=True)
        elif section == PROJECTS:
            for project in doc.projects:
                st.markdown(f"**{project.title}**")
                for b in project.bullets:
                    st.markdown(f"- {b}")
        elif section == SKILLS:
            for group in doc.skills:
                st.markdown(f"**{group.category}:** {group.items_text()}")
        elif section == CERTIFICATIONS:
            for cert in doc.certifications:
                st.markdown(f"- {cert.display()}")


# ---------------------------------------------------------------------------
# MAIN APP
# ---------------------------------------------------------------------------

def main():
    st.title("📄 Resume Export")
    st.caption("Load an optimised resume (JSON), check the preview, download PDF, Word or TXT.")

    with st.sidebar:
        st.header("⚙️ Layout Settings")
        order_names = list(SECTION_ORDERS)
        order_name = st.selectbox(
            "Section order",
            options=order_names,
            index=order_names.index(get_default_order()),
            format_func=lambda key: ORDER_LABELS[key],
        )
        strict = st.checkbox(
            "Split long paragraphs across pages",
            value=get_default_strict(),
            help="Checks space line by line instead of keeping each paragraph whole.",
        )

    uploaded = st.file_uploader("Upload resume JSON", type=["json"])
    if uploaded is not None:
        st.session_state["resume_raw"] = uploaded.read().decode("utf-8", errors="ignore")

    raw = st.text_area(
        "Resume JSON",
        value=st.session_state.get("resume_raw", ""),
        height=320,
        placeholder='{"name": "...", "contact": {...}, "workExperience": [...]}',
    )
    if not raw.strip():
        st.info("Upload or paste resume JSON to continue.", icon="ℹ️")
        return

    doc = load_resume(raw)
    if doc is None:
        return
    st.session_state["resume_raw"] = raw

    order = section_order_for(order_name)
    options = LayoutOptions(section_order=order, strict_line_breaks=strict)

    st.divider()
    tab_preview, tab_json = st.tabs(["👁️ Resume Preview", "📝 Normalised JSON"])

    with tab_preview:
        render_preview(doc, order)
        st.divider()
        d1, d2, d3 = st.columns(3)
        with d1:
            try:
                pdf_bytes = export_pdf(doc, options)
                st.download_button(
                    f"📥 Download PDF ({count_pages(pdf_bytes)} page(s))",
                    data=pdf_bytes,
                    file_name=pdf_filename(doc.name),
                    mime="application/pdf",
                    use_container_width=True,
                )
            except DocumentGenerationError as e:
                st.error(str(e))
        with d2:
            try:
                st.download_button(
                    "📄 Download Word",
                    data=export_docx(doc, order),
                    file_name=docx_filename(doc.name),
                    mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                    use_container_width=True,
                )
            except DocumentGenerationError as e:
                st.error(str(e))
        with d3:
            st.download_button(
                "🗒️ Download TXT",
                data=resume_to_text(doc, order),
                file_name=text_filename(doc.name),
                mime="text/plain",
                use_container_width=True,
            )

    with tab_json:
        st.caption("The resume as the exporter reads it, after clean-up.")
        st.code(json.dumps(doc.to_dict(), indent=2, ensure_ascii=False), language="json")


if __name__ == "__main__":
    main()
