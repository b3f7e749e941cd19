from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .blocks import BlockRenderer
from .geometry import WEIGHT_BOLD, FontSpec
from .model import ResumeDocument

# ---------------------------------------------------------------------------
# SECTION NAMES & ORDER POLICIES
# ---------------------------------------------------------------------------

SUMMARY        = "summary"
EXPERIENCE     = "experience"
EDUCATION      = "education"
PROJECTS       = "projects"
SKILLS         = "skills"
CERTIFICATIONS = "certifications"

SECTION_TITLES = {
    SUMMARY:        "PROFESSIONAL SUMMARY",
    EXPERIENCE:     "EXPERIENCE",
    EDUCATION:      "EDUCATION",
    PROJECTS:       "PROJECTS",
    SKILLS:         "SKILLS",
    CERTIFICATIONS: "CERTIFICATIONS",
}

SECTION_ALIASES = {
    "workexperience": EXPERIENCE,
    "work_experience": EXPERIENCE,
    "certs": CERTIFICATIONS,
}

# Export default: one canonical order regardless of user type.
CANONICAL_ORDER = (EXPERIENCE, EDUCATION, PROJECTS, SKILLS, CERTIFICATIONS)
# On-screen preview policies.
EXPERIENCED_ORDER = (SUMMARY, EXPERIENCE, PROJECTS, SKILLS, CERTIFICATIONS, EDUCATION)
FRESHER_ORDER = (EDUCATION, EXPERIENCE, PROJECTS, SKILLS, CERTIFICATIONS)

SECTION_ORDERS = {
    "canonical":   CANONICAL_ORDER,
    "experienced": EXPERIENCED_ORDER,
    "fresher":     FRESHER_ORDER,
}


def section_order_for(user_type: str) -> Tuple[str, ...]:
    key = (user_type or "").strip().lower()
    if key not in SECTION_ORDERS:
        raise ValueError(f"Unknown section order {user_type!r}. Choose from: {', '.join(SECTION_ORDERS)}")
    return SECTION_ORDERS[key]


def resolve_section_order(order: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Normalise section names, drop repeats, reject unknown names."""
    if order is None:
        return CANONICAL_ORDER
    resolved = []
    for raw in order:
        key = str(raw).strip().lower()
        key = SECTION_ALIASES.get(key, key)
        if key not in SECTION_TITLES:
            raise ValueError(f"Unknown resume section {raw!r}.")
        if key not in resolved:
            resolved.append(key)
    return tuple(resolved)


def has_content(doc: ResumeDocument, section: str) -> bool:
    if section == SUMMARY:
        return bool(doc.summary)
    if section == EXPERIENCE:
        return bool(doc.work_experience)
    if section == EDUCATION:
        return bool(doc.education)
    if section == PROJECTS:
        return bool(doc.projects)
    if section == SKILLS:
        return any(g.category or g.items for g in doc.skills)
    if section == CERTIFICATIONS:
        return bool(doc.certifications)
    return False


# ---------------------------------------------------------------------------
# SHARED PIECES
# ---------------------------------------------------------------------------

def _gap(r: BlockRenderer, height: float) -> float:
    r.state.advance(height)
    return height


def _bullet_list(r: BlockRenderer, items: Sequence[str]) -> float:
    spacing = r.geometry.spacing
    total = _gap(r, spacing.bullet_list)
    for item in items:
        total += r.draw_bullet(item)
    total += _gap(r, spacing.bullet_list)
    return total


def _bullets_reserve(r: BlockRenderer, bullets: Sequence[str]) -> Tuple[float, float]:
    """(reserve for the first bullet, one body line) including the gaps before it."""
    if not bullets:
        return 0.0, 0.0
    spacing = r.geometry.spacing
    lead = spacing.before_bullets + spacing.bullet_list
    return lead + r.bullet_reserve(bullets[0]), lead + r.line_height(r.geometry.fonts.body)


def _entry_header(
    r: BlockRenderer,
    primary: str,
    secondary: Optional[str],
    date_range: str,
    bullets: Sequence[str] = (),
) -> float:
    """Bold primary line, optional regular second line, date right-aligned on the first.

    The header is kept on the same page as the first bullet that follows it whenever
    a fresh page could hold both.
    """
    fonts = r.geometry.fonts
    left = r.geometry.margins.left

    # the primary line wraps short of the date column
    primary_width = r.geometry.content_width
    if date_range:
        date_w = r.measurer.text_width(date_range, fonts.year.size, fonts.year.weight)
        primary_width -= date_w + r.geometry.spacing.date_gap

    header_h = r.text_height(primary, fonts.job_title, primary_width)
    if secondary is not None:
        header_h += r.text_height(secondary, fonts.company)
    follow, follow_min = _bullets_reserve(r, bullets)
    r.ensure_space(header_h + follow, header_h + follow_min)

    total = r.draw_text(primary, left, fonts.job_title, max_width=primary_width)
    first = r.last_block
    if secondary is not None:
        total += r.draw_text(secondary, left, fonts.company)
    if date_range:
        r.draw_at(date_range, first.page, first.y, fonts.year)
    return total


# ---------------------------------------------------------------------------
# SECTION COMPOSERS
# ---------------------------------------------------------------------------

def compose_summary(r: BlockRenderer, doc: ResumeDocument) -> float:
    if not doc.summary:
        return 0.0
    total = r.draw_section_title(SECTION_TITLES[SUMMARY])
    total += r.draw_text(doc.summary, r.geometry.margins.left, r.geometry.fonts.body)
    return total


def compose_experience(r: BlockRenderer, doc: ResumeDocument) -> float:
    jobs = doc.work_experience
    if not jobs:
        return 0.0
    spacing = r.geometry.spacing

    total = r.draw_section_title(SECTION_TITLES[EXPERIENCE])
    for index, job in enumerate(jobs):
        total += _entry_header(r, job.role, job.company, job.date_range, job.bullets)
        total += _gap(r, spacing.before_bullets)
        if job.bullets:
            total += _bullet_list(r, job.bullets)
        if index < len(jobs) - 1:
            total += _gap(r, spacing.after_subsection)
    return total


def compose_education(r: BlockRenderer, doc: ResumeDocument) -> float:
    schools = doc.education
    if not schools:
        return 0.0
    spacing = r.geometry.spacing

    total = _gap(r, spacing.before_education)
    total += r.draw_section_title(SECTION_TITLES[EDUCATION])
    for index, edu in enumerate(schools):
        total += _entry_header(r, edu.degree, edu.school, edu.date_range)
        if index < len(schools) - 1:
            total += _gap(r, spacing.between_education)
    return total


def compose_projects(r: BlockRenderer, doc: ResumeDocument) -> float:
    projects = doc.projects
    if not projects:
        return 0.0
    spacing = r.geometry.spacing

    total = r.draw_section_title(SECTION_TITLES[PROJECTS])
    for index, project in enumerate(projects):
        total += _entry_header(r, project.title, None, "", project.bullets)
        total += _gap(r, spacing.before_bullets)
        if project.bullets:
            total += _bullet_list(r, project.bullets)
        if index < len(projects) - 1:
            total += _gap(r, spacing.after_subsection)
    return total


def compose_skills(r: BlockRenderer, doc: ResumeDocument) -> float:
    groups = [g for g in doc.skills if g.category or g.items]
    if not groups:
        return 0.0
    body = r.geometry.fonts.body
    label_font = FontSpec(body.size, WEIGHT_BOLD)

    total = r.draw_section_title(SECTION_TITLES[SKILLS])
    for index, group in enumerate(groups):
        total += r.draw_inline_pair(group.label, group.items_text(), label_font, body)
        if index < len(groups) - 1:
            total += _gap(r, r.geometry.spacing.between_skills)
    return total


def compose_certifications(r: BlockRenderer, doc: ResumeDocument) -> float:
    if not doc.certifications:
        return 0.0
    total = r.draw_section_title(SECTION_TITLES[CERTIFICATIONS])
    total += _bullet_list(r, [c.display() for c in doc.certifications])
    return total


COMPOSERS: Dict[str, Callable[[BlockRenderer, ResumeDocument], float]] = {
    SUMMARY:        compose_summary,
    EXPERIENCE:     compose_experience,
    EDUCATION:      compose_education,
    PROJECTS:       compose_projects,
    SKILLS:         compose_skills,
    CERTIFICATIONS: compose_certifications,
}


def compose_sections(r: BlockRenderer, doc: ResumeDocument, order: Sequence[str]) -> Dict[str, float]:
    """Run each composer in ``order``; returns the height each section consumed."""
    return {section: COMPOSERS[section](r, doc) for section in order}
