import json

import pytest

from resume_layout.model import (
    CERT_NAMED, CERT_PLAIN, CERT_RAW, CERT_TITLED,
    Contact, InvalidResumeError, ResumeDocument, file_stem, normalize_certification,
)


class TestCertificationNormalization:
    def test_title_and_issuer(self):
        cert = normalize_certification({"title": "AWS SA", "issuer": "Amazon"})
        assert cert.kind == CERT_TITLED
        assert cert.display() == "AWS SA - Amazon"

    def test_name_only(self):
        cert = normalize_certification({"name": "PMP"})
        assert cert.kind == CERT_NAMED
        assert cert.display() == "PMP"

    def test_plain_string(self):
        cert = normalize_certification("Scrum Master")
        assert cert.kind == CERT_PLAIN
        assert cert.display() == "Scrum Master"

    def test_title_and_issuer_beats_name(self):
        cert = normalize_certification({"title": "CKA", "issuer": "CNCF", "name": "ignored"})
        assert cert.display() == "CKA - CNCF"

    def test_title_without_issuer_falls_through_to_name(self):
        cert = normalize_certification({"title": "CKA", "name": "Kubernetes Admin"})
        assert cert.display() == "Kubernetes Admin"

    def test_unknown_shape_becomes_json(self):
        cert = normalize_certification({"credential": "X-1", "year": 2020})
        assert cert.kind == CERT_RAW
        assert json.loads(cert.display()) == {"credential": "X-1", "year": 2020}

    def test_plain_string_is_collapsed_to_one_line(self):
        assert normalize_certification("  Line1\nLine2 ").display() == "Line1 Line2"

    def test_title_with_blank_issuer(self):
        assert normalize_certification({"title": "CKA", "issuer": None}).display() == "CKA"

    def test_scalar_is_stringified(self):
        assert normalize_certification(42).display() == "42"


class TestContact:
    def test_line_skips_missing_fields(self):
        contact = Contact(phone="555-1234", email="a@b.com")
        assert contact.line() == "555-1234 | a@b.com"

    def test_fixed_field_order(self):
        contact = Contact(github="gh/x", email="a@b.com", linkedin="li/x", phone="1")
        assert contact.parts() == ["1", "a@b.com", "li/x", "gh/x"]

    def test_empty_contact(self):
        assert Contact().line() == ""

    def test_nested_block_wins(self):
        contact = Contact.from_dict({"email": "top@x.com", "contact": {"email": "nested@x.com"}})
        assert contact.email == "nested@x.com"


class TestResumeDocument:
    def test_from_dict_reads_aliases(self, resume):
        assert resume.name == "Jane Doe"
        assert resume.work_experience[0].date_range == "2021 - Present"
        assert resume.skills[0].items == ("Python", "Go", "SQL")
        assert [c.display() for c in resume.certifications] == ["AWS SA - Amazon", "PMP", "Scrum Master"]

    def test_snake_case_keys(self):
        doc = ResumeDocument.from_dict({
            "name": "A",
            "work_experience": [{"role": "R", "company": "C", "date_range": "2020", "bullets": ["b"]}],
            "skills": [{"category": "K", "items": ["x"]}],
        })
        assert doc.work_experience[0].date_range == "2020"
        assert doc.skills[0].items == ("x",)

    def test_whitespace_is_collapsed(self):
        doc = ResumeDocument.from_dict({"name": "  Jane   Doe \n"})
        assert doc.name == "Jane Doe"

    def test_absent_sections_are_empty(self):
        doc = ResumeDocument.from_dict({"name": "A"})
        assert doc.work_experience == ()
        assert doc.certifications == ()
        assert doc.summary == ""

    def test_blank_certifications_are_dropped(self):
        doc = ResumeDocument.from_dict({
            "name": "A",
            "certifications": ["   ", {"name": None}, "", "Line1\nLine2", "PMP"],
        })
        assert [c.display() for c in doc.certifications] == ["Line1 Line2", "PMP"]

    def test_missing_name_is_rejected(self):
        with pytest.raises(InvalidResumeError):
            ResumeDocument.from_dict({"summary": "no name"})

    def test_non_mapping_is_rejected(self):
        with pytest.raises(InvalidResumeError):
            ResumeDocument.from_dict(["not", "a", "dict"])

    def test_to_dict_reads_back(self, resume):
        assert ResumeDocument.from_dict(resume.to_dict()) == resume


def test_file_stem():
    assert file_stem("Jane  Mary Doe") == "Jane_Mary_Doe"
