"""
Résumé data model.

The AI optimisation step hands back loosely-shaped JSON; ``ResumeDocument.from_dict``
is the single place where that JSON is cleaned up. Everything downstream of it
(layout, exporters) works on these dataclasses and never re-checks shapes.
"""
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence


class InvalidResumeError(ValueError):
    """Raised when the input cannot be turned into a ResumeDocument at all."""


def clean_inline(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _clean_list(values: Any) -> List[str]:
    return [clean_inline(v) for v in _as_list(values) if clean_inline(v)]


# ---------------------------------------------------------------------------
# CONTACT
# ---------------------------------------------------------------------------

CONTACT_FIELDS = ("phone", "email", "linkedin", "github")
CONTACT_SEPARATOR = " | "


@dataclass(frozen=True)
class Contact:
    phone: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""

    def parts(self) -> List[str]:
        return [getattr(self, f) for f in CONTACT_FIELDS if getattr(self, f)]

    def line(self) -> str:
        return CONTACT_SEPARATOR.join(self.parts())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contact":
        nested = data.get("contact")
        source = nested if isinstance(nested, Mapping) else {}
        values = {}
        for f in CONTACT_FIELDS:
            # nested "contact" block wins over top-level keys
            values[f] = clean_inline(_first(source, f)) or clean_inline(_first(data, f))
        return cls(**values)


# ---------------------------------------------------------------------------
# ENTRIES
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WorkEntry:
    role: str
    company: str
    date_range: str = ""
    bullets: Sequence[str] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkEntry":
        return cls(
            role=clean_inline(_first(data, "role", "title")),
            company=clean_inline(data.get("company")),
            date_range=clean_inline(_first(data, "dateRange", "date_range", "year")),
            bullets=tuple(_clean_list(data.get("bullets"))),
        )


@dataclass(frozen=True)
class EducationEntry:
    degree: str
    school: str
    date_range: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationEntry":
        return cls(
            degree=clean_inline(data.get("degree")),
            school=clean_inline(data.get("school")),
            date_range=clean_inline(_first(data, "dateRange", "date_range", "year")),
        )


@dataclass(frozen=True)
class Project:
    title: str
    bullets: Sequence[str] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        return cls(
            title=clean_inline(_first(data, "title", "name")),
            bullets=tuple(_clean_list(data.get("bullets"))),
        )


@dataclass(frozen=True)
class SkillGroup:
    category: str
    items: Sequence[str] = ()

    @property
    def label(self) -> str:
        return f"{self.category}: "

    def items_text(self) -> str:
        return ", ".join(self.items)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkillGroup":
        return cls(
            category=clean_inline(data.get("category")),
            items=tuple(_clean_list(_first(data, "items", "list"))),
        )


# ---------------------------------------------------------------------------
# CERTIFICATIONS
# ---------------------------------------------------------------------------

CERT_TITLED = "titled"
CERT_NAMED  = "named"
CERT_PLAIN  = "plain"
CERT_RAW    = "raw"


@dataclass(frozen=True)
class Certification:
    """A certification in one of the shapes the optimiser is known to emit.

    ``kind`` tags which shape was seen; ``text`` is the resolved display string.
    """
    kind: str
    text: str
    title: str = ""
    issuer: str = ""

    def display(self) -> str:
        return self.text


def _certification_dict(cert: Certification) -> Any:
    if cert.kind == CERT_TITLED:
        return {"title": cert.title, "issuer": cert.issuer}
    if cert.kind == CERT_NAMED:
        return {"name": cert.text}
    return cert.text


def normalize_certification(raw: Any) -> Certification:
    """Resolve a raw certification value using title+issuer > name > string > JSON."""
    if isinstance(raw, str):
        return Certification(CERT_PLAIN, clean_inline(raw))
    if isinstance(raw, Mapping):
        if "title" in raw and "issuer" in raw:
            title, issuer = clean_inline(raw["title"]), clean_inline(raw["issuer"])
            text = " - ".join(part for part in (title, issuer) if part)
            return Certification(CERT_TITLED, text, title=title, issuer=issuer)
        if "name" in raw:
            return Certification(CERT_NAMED, clean_inline(raw["name"]))
        return Certification(CERT_RAW, json.dumps(raw, separators=(",", ":"), default=str))
    return Certification(CERT_RAW, str(raw))


# ---------------------------------------------------------------------------
# DOCUMENT
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResumeDocument:
    name: str
    contact: Contact = field(default_factory=Contact)
    summary: str = ""
    work_experience: Sequence[WorkEntry] = ()
    education: Sequence[EducationEntry] = ()
    projects: Sequence[Project] = ()
    skills: Sequence[SkillGroup] = ()
    certifications: Sequence[Certification] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeDocument":
        if not isinstance(data, Mapping):
            raise InvalidResumeError("Resume data must be a JSON object.")
        name = clean_inline(data.get("name"))
        if not name:
            raise InvalidResumeError("Resume data is missing a name.")

        def entries(keys, parser):
            out = []
            for item in _as_list(_first(data, *keys)):
                if isinstance(item, Mapping):
                    out.append(parser(item))
            return tuple(out)

        certs = tuple(
            cert
            for cert in (normalize_certification(c) for c in _as_list(data.get("certifications")) if c is not None)
            if cert.display()
        )
        return cls(
            name=name,
            contact=Contact.from_dict(data),
            summary=clean_inline(data.get("summary")),
            work_experience=entries(("workExperience", "work_experience", "experience"), WorkEntry.from_dict),
            education=entries(("education",), EducationEntry.from_dict),
            projects=entries(("projects",), Project.from_dict),
            skills=entries(("skills",), SkillGroup.from_dict),
            certifications=certs,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Camel-cased JSON shape, the same one ``from_dict`` reads."""
        contact = {f: getattr(self.contact, f) for f in CONTACT_FIELDS if getattr(self.contact, f)}
        return {
            "name": self.name,
            "contact": contact,
            "summary": self.summary,
            "workExperience": [
                {"role": w.role, "company": w.company, "dateRange": w.date_range, "bullets": list(w.bullets)}
                for w in self.work_experience
            ],
            "education": [
                {"degree": e.degree, "school": e.school, "dateRange": e.date_range}
                for e in self.education
            ],
            "projects": [{"title": p.title, "bullets": list(p.bullets)} for p in self.projects],
            "skills": [{"category": s.category, "items": list(s.items)} for s in self.skills],
            "certifications": [_certification_dict(c) for c in self.certifications],
        }


def file_stem(name: str) -> str:
    """``"Jane  Doe"`` -> ``"Jane_Doe"``, used for download file names."""
    return re.sub(r"\s+", "_", name.strip())
