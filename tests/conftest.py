import pytest

from resume_layout.geometry import A4_GEOMETRY
from resume_layout.measure import Measurer
from resume_layout.model import ResumeDocument


class CharWidthMeasurer(Measurer):
    """Every character is ``char_width`` mm wide, whatever the font."""

    def __init__(self, char_width: float = 1.0):
        super().__init__(A4_GEOMETRY.spacing.line_height)
        self.char_width = char_width

    def text_width(self, text, font_size, weight):
        return len(text) * self.char_width


class BrokenMeasurer(Measurer):
    def text_width(self, text, font_size, weight):
        raise RuntimeError("font metrics unavailable")


def words(count: int, word: str = "abcdefghi") -> str:
    return " ".join([word] * count)


@pytest.fixture
def measurer():
    return CharWidthMeasurer()


@pytest.fixture
def resume_data():
    return {
        "name": "Jane Doe",
        "phone": "555-1234",
        "email": "jane@example.com",
        "linkedin": "linkedin.com/in/janedoe",
        "summary": "Backend engineer focused on data pipelines and developer tooling.",
        "workExperience": [
            {
                "role": "Senior Engineer",
                "company": "Acme Corp",
                "year": "2021 - Present",
                "bullets": [
                    "Rebuilt the billing pipeline on Kafka, cutting settlement time by 40%.",
                    "Led a team of four engineers through a Postgres to Aurora migration.",
                ],
            },
            {
                "role": "Engineer",
                "company": "Initech",
                "year": "2018 - 2021",
                "bullets": ["Maintained the TPS report generator."],
            },
        ],
        "education": [
            {"degree": "B.Sc. Computer Science", "school": "State University", "year": "2014 - 2018"},
        ],
        "projects": [
            {"title": "pgdiff", "bullets": ["Schema diff tool for Postgres, 1k GitHub stars."]},
        ],
        "skills": [
            {"category": "Languages", "list": ["Python", "Go", "SQL"]},
            {"category": "Infrastructure", "list": ["Kafka", "Kubernetes"]},
        ],
        "certifications": [
            {"title": "AWS SA", "issuer": "Amazon"},
            {"name": "PMP"},
            "Scrum Master",
        ],
    }


@pytest.fixture
def resume(resume_data):
    return ResumeDocument.from_dict(resume_data)
