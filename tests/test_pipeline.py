import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.normalize.pipeline import (  # noqa: E402
    TailoredResumeValidationError,
    normalize_parsed_resume,
    normalize_tailored_resume,
)


def _canonical(model) -> str:
    return json.dumps(model.to_record(), sort_keys=True)


MESSY_PARSED = {
    "contact": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "",
        "location": "unknown",
        "linkedin": "https://linkedin.com/in/janedoe",
        "github": "jdoe",
        "website": None,
    },
    "summary": "  Backend engineer.  ",
    "experience": [
        {"company": "Acme", "title": "Engineer", "startDate": "2020", "highlights": ["Built APIs"]},
        {
            "company": "Acme",
            "title": "Engineer",
            "startDate": "2020",
            "location": "NYC",
            "endDate": None,
            "highlights": ["Built APIs"],
        },
        {"title": None, "highlights": "Did things"},
        "not an entry",
    ],
    "education": [{"institution": "MIT", "degree": "BSc", "gpa": 3.8, "startDate": None}],
    "skills": {"technical": ["React", "Kafka"], "languages": ["English"], "tools": ["docker", "Docker"]},
    "projects": [
        {
            "name": "X",
            "description": "Built a thing. It scaled well. Users loved it. It was fast. It won an award.",
            "highlights": [],
            "url": "x.io",
        },
        {"highlights": ["Solo bullet"]},
    ],
    "certifications": [{"name": "CKA", "issuer": None}],
    "_parseWarnings": ["No skills section found", "Dates may be approximate"],
}

MESSY_TAILORED = {
    "tailoredResume": {
        "contact": {"name": "Jane Doe", "github": "https://github.com/janedoe"},
        "summary": "Engineer focused on Python services.",
        "experience": [
            {"company": "Acme", "title": "Engineer", "startDate": "2020", "highlights": ["Built APIs"]},
            {"company": "Acme", "title": "Engineer", "startDate": "2020", "highlights": ["Built APIs"], "location": "NYC"},
        ],
        "education": [{"institution": "MIT", "degree": "BSc"}],
        "skills": {"technical": ["React", "Go", "Terraform"], "soft": ["Leadership"]},
        "projects": [{"name": "Tool", "description": "Automated reports. Saved hours."}],
        "customSections": [{"id": "c1", "title": "Volunteering", "bullets": ["Mentor"]}],
        "matchedKeywords": ["Python"],
        "missingKeywords": ["Kubernetes", "GraphQL"],
    }
}


class ParsedPipelineTests(unittest.TestCase):
    def test_scenario_a_empty_sections_need_review(self):
        result = normalize_parsed_resume({"contact": {"name": "Jane Doe"}, "experience": [], "education": []})
        self.assertTrue(result.needs_review)
        self.assertTrue(any(w.startswith("No work experience found") for w in result.warnings))
        self.assertTrue(any(w.startswith("No education found") for w in result.warnings))

    def test_messy_input_is_normalized(self):
        result = normalize_parsed_resume(MESSY_PARSED)
        resume = result.resume
        self.assertEqual(resume.contact.linkedin, "linkedin.com/in/janedoe")
        self.assertIsNone(resume.contact.github)
        self.assertIsNone(resume.contact.location)
        self.assertEqual(resume.summary, "Backend engineer.")

        self.assertEqual(len(resume.experience), 2)
        self.assertEqual(resume.experience[0].location, "NYC")
        self.assertEqual(resume.experience[1].company, "Unknown Company")
        self.assertEqual(resume.experience[1].highlights, ["Did things"])

        self.assertEqual(resume.education[0].gpa, "3.8")
        self.assertEqual(resume.skills.technical, ["React", "Kafka"])
        self.assertEqual(resume.skills.tools, ["docker"])
        self.assertIn("English", resume.skills.languages)
        self.assertIn("TypeScript", resume.skills.languages)

        self.assertEqual(
            resume.projects[0].highlights,
            ["Built a thing", "It scaled well", "Users loved it", "It was fast"],
        )
        self.assertIsNone(resume.projects[0].url)
        self.assertEqual(resume.projects[1].name, "Untitled Project")
        self.assertEqual(resume.projects[1].highlights, ["Solo bullet"] * 3)
        self.assertEqual(resume.certifications[0].name, "CKA")

        self.assertNotIn("No skills section found", result.warnings)
        self.assertIn("Dates may be approximate", result.warnings)
        self.assertIn("Some job entries may be missing company or title information", result.warnings)
        self.assertTrue(result.needs_review)

    def test_no_null_values_in_output(self):
        record = normalize_parsed_resume(MESSY_PARSED).resume.to_record()
        self.assertNotIn("null", json.dumps(record))
        for entry in record["experience"]:
            self.assertTrue(entry["company"])
            self.assertTrue(entry["title"])
            self.assertTrue(entry["startDate"])

    def test_parsed_normalization_is_idempotent(self):
        once = normalize_parsed_resume(MESSY_PARSED)
        twice = normalize_parsed_resume(once.resume)
        self.assertEqual(_canonical(once.resume), _canonical(twice.resume))
        thrice = normalize_parsed_resume(json.loads(_canonical(twice.resume)))
        self.assertEqual(_canonical(twice.resume), _canonical(thrice.resume))

    def test_validation_failure_returns_fallback(self):
        result = normalize_parsed_resume(
            {
                "contact": {"name": "Jane Doe", "email": "not-an-email"},
                "summary": "Engineer",
                "experience": [{"company": "Acme", "title": "Engineer", "highlights": []}],
                "education": [],
                "skills": {"other": ["Kafka"]},
            }
        )
        self.assertTrue(result.needs_review)
        self.assertEqual(result.resume.contact.name, "Jane Doe")
        self.assertIsNone(result.resume.contact.email)
        self.assertEqual(result.resume.experience, [])
        self.assertEqual(result.resume.projects, [])
        self.assertEqual(result.resume.summary, "Engineer")
        self.assertEqual(result.resume.skills.other, ["Kafka"])
        self.assertTrue(any(w.startswith("Parsing issue: contact.email") for w in result.warnings))

    def test_non_object_payload_still_returns_a_record(self):
        result = normalize_parsed_resume(["not", "a", "resume"])
        self.assertEqual(result.resume.contact.name, "Unknown")
        self.assertTrue(result.needs_review)


class TailoredPipelineTests(unittest.TestCase):
    def test_scenario_c_unknown_keyword_lands_in_other_once(self):
        resume = normalize_tailored_resume(MESSY_TAILORED, ["Kubernetes"])
        self.assertEqual(resume.skills.other.count("Kubernetes"), 1)
        self.assertNotIn("Kubernetes", resume.missing_keywords)
        self.assertIn("Kubernetes", resume.matched_keywords)
        self.assertEqual(resume.missing_keywords, ["GraphQL"])

    def test_technical_is_drained(self):
        resume = normalize_tailored_resume(MESSY_TAILORED, [])
        self.assertEqual(resume.skills.technical, [])
        self.assertIn("React", resume.skills.frameworks)
        self.assertIn("Go", resume.skills.languages)
        self.assertIn("Terraform", resume.skills.other)
        self.assertEqual(resume.skills.soft, ["Leadership"])

    def test_every_selected_keyword_is_covered(self):
        keywords = ["Kubernetes", "python", "Docker", "CI/CD", "Event Sourcing"]
        resume = normalize_tailored_resume(MESSY_TAILORED, keywords)
        blob = json.dumps(resume.to_record()).lower()
        for keyword in keywords:
            self.assertIn(keyword.lower(), blob)
        self.assertIn("Docker", resume.skills.tools)

    def test_wrapper_dedupe_and_sections(self):
        resume = normalize_tailored_resume(MESSY_TAILORED, [])
        self.assertEqual(resume.contact.github, "github.com/janedoe")
        self.assertEqual(len(resume.experience), 1)
        self.assertEqual(resume.experience[0].location, "NYC")
        self.assertEqual(resume.projects[0].highlights, ["Automated reports", "Saved hours", "Saved hours"])
        self.assertEqual(resume.custom_sections[0].type, "bullets")

    def test_tailored_normalization_is_idempotent(self):
        keywords = ["Kubernetes", "Docker"]
        once = normalize_tailored_resume(MESSY_TAILORED, keywords)
        twice = normalize_tailored_resume(once.to_record(), keywords)
        self.assertEqual(_canonical(once), _canonical(twice))

    def test_missing_sections_come_from_base(self):
        base = normalize_parsed_resume(MESSY_PARSED).resume
        resume = normalize_tailored_resume({"summary": "", "skills": {"technical": ["Go"]}}, [], base=base)
        self.assertEqual(resume.contact.name, "Jane Doe")
        self.assertEqual(resume.summary, "Backend engineer.")
        self.assertEqual(len(resume.experience), 2)
        self.assertEqual(resume.skills.languages, ["Go"])

    def test_empty_summary_is_allowed(self):
        resume = normalize_tailored_resume({"contact": {"name": "Jane"}}, [])
        self.assertEqual(resume.summary, "")
        self.assertEqual(resume.experience, [])

    def test_invalid_record_raises_with_issue_paths(self):
        with self.assertRaises(TailoredResumeValidationError) as ctx:
            normalize_tailored_resume({"contact": {"name": "Jane", "email": "nope"}}, [])
        self.assertEqual([issue.path for issue in ctx.exception.issues], ["contact.email"])
        self.assertTrue(str(ctx.exception).startswith("Failed to tailor resume: contact.email"))


if __name__ == "__main__":
    unittest.main()
