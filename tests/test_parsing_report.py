import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.parsing_report import (  # noqa: E402
    INCOMPLETE_EDUCATION_WARNING,
    INCOMPLETE_EXPERIENCE_WARNING,
    MISSING_NAME_WARNING,
    NO_EDUCATION_WARNING,
    NO_EXPERIENCE_WARNING,
    build_parsing_report,
)

_COMPLETE = {
    "contact": {"name": "Jane Doe"},
    "summary": "Engineer.",
    "experience": [{"company": "Acme", "title": "Engineer", "startDate": "2020", "highlights": []}],
    "education": [{"institution": "MIT", "degree": "BSc"}],
    "skills": {"languages": ["Python"]},
    "projects": [],
    "certifications": [],
}


class ParsingReportTests(unittest.TestCase):
    def test_complete_record_needs_no_review(self):
        report = build_parsing_report(_COMPLETE, [])
        self.assertEqual(report.warnings, [])
        self.assertFalse(report.needs_review)
        self.assertFalse(report.missing_contact)

    def test_contradicted_llm_warnings_are_dropped(self):
        report = build_parsing_report(
            _COMPLETE,
            [
                "No skills section found",
                "No work experience section detected",
                "Name not found in header",
                "No explicit objective statement",
                "No projects listed",
            ],
        )
        self.assertEqual(report.warnings, ["No projects listed"])
        self.assertFalse(report.needs_review)

    def test_entry_level_warnings_survive_when_section_is_present(self):
        warnings = [
            "Company name not found for the second role",
            "No dates for experience entries",
            "No end date for education entry",
            "No project name for the second project",
        ]
        record = dict(_COMPLETE, projects=[{"name": "Tool", "highlights": ["a", "b", "c"]}])
        report = build_parsing_report(record, warnings)
        self.assertEqual(report.warnings, warnings)
        self.assertFalse(report.needs_review)

    def test_section_gap_variants_are_dropped_when_section_is_present(self):
        record = dict(_COMPLETE, projects=[{"name": "Tool", "highlights": ["a", "b", "c"]}])
        report = build_parsing_report(
            record,
            ["No work history found.", "No education listed", "no projects", "Full name was not found"],
        )
        self.assertEqual(report.warnings, [])

    def test_llm_warnings_are_deduplicated_case_insensitively(self):
        report = build_parsing_report(_COMPLETE, ["Dates look odd", "dates look odd", "  "])
        self.assertEqual(report.warnings, ["Dates look odd"])

    def test_deterministic_warnings_follow_llm_warnings_in_fixed_order(self):
        record = {
            "contact": {"name": "Unknown"},
            "experience": [],
            "education": [],
            "skills": {},
        }
        report = build_parsing_report(record, ["Layout was unusual"])
        self.assertEqual(
            report.warnings,
            ["Layout was unusual", MISSING_NAME_WARNING, NO_EXPERIENCE_WARNING, NO_EDUCATION_WARNING],
        )
        self.assertTrue(report.needs_review)
        self.assertTrue(report.missing_contact)

    def test_sentinel_entries_are_flagged(self):
        record = dict(
            _COMPLETE,
            experience=[{"company": "Unknown Company", "title": "Engineer", "startDate": "2020", "highlights": []}],
            education=[{"institution": "MIT", "degree": "Unknown Degree"}],
        )
        report = build_parsing_report(record)
        self.assertEqual(report.warnings, [INCOMPLETE_EXPERIENCE_WARNING, INCOMPLETE_EDUCATION_WARNING])
        self.assertTrue(report.needs_review)

    def test_gap_warning_survives_when_section_is_really_missing(self):
        record = dict(_COMPLETE, certifications=[])
        report = build_parsing_report(record, ["No certifications found"])
        self.assertEqual(report.warnings, ["No certifications found"])


if __name__ == "__main__":
    unittest.main()
