import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.normalize.skills import (  # noqa: E402
    MUST_HAVE_LANGUAGES,
    add_skill,
    bucketize_skills,
    classify_skill,
)
from app.schemas.raw import RawSkills  # noqa: E402


class SkillBucketizerTests(unittest.TestCase):
    def test_tailored_policy_drains_technical(self):
        skills = bucketize_skills(RawSkills(technical=["React", "Go"]), "tailored")
        self.assertEqual(skills["technical"], [])
        self.assertIn("React", skills["frameworks"])
        self.assertIn("Go", skills["languages"])

    def test_unknown_technical_skill_lands_in_other(self):
        skills = bucketize_skills(RawSkills(technical=["Kubernetes"]), "tailored")
        self.assertEqual(skills["other"], ["Kubernetes"])

    def test_dedupe_is_case_insensitive_and_keeps_first_casing(self):
        skills = bucketize_skills(RawSkills(tools=["Docker", "docker", "DOCKER "]), "tailored")
        self.assertEqual(skills["tools"], ["Docker"])

    def test_misfiled_skill_moves_to_lookup_bucket(self):
        skills = bucketize_skills(RawSkills(languages=["Docker", "Python"], other=["React"]), "tailored")
        self.assertEqual(skills["languages"], ["Python"])
        self.assertEqual(skills["tools"], ["Docker"])
        self.assertEqual(skills["frameworks"], ["React"])
        self.assertEqual(skills["other"], [])

    def test_unknown_skill_stays_in_source_bucket(self):
        skills = bucketize_skills(RawSkills(frameworks=["Pandas"]), "tailored")
        self.assertEqual(skills["frameworks"], ["Pandas"])

    def test_sql_stays_in_tools_under_parsed_policy_only(self):
        parsed = bucketize_skills(RawSkills(tools=["SQL"]), "parsed")
        tailored = bucketize_skills(RawSkills(tools=["SQL"]), "tailored")
        self.assertEqual(parsed["tools"], ["SQL"])
        self.assertEqual(tailored["tools"], [])
        self.assertEqual(tailored["languages"], ["SQL"])

    def test_parsed_policy_adds_must_have_languages_and_keeps_technical(self):
        skills = bucketize_skills(RawSkills(technical=["Kubernetes"], languages=["python"]), "parsed")
        self.assertEqual(skills["technical"], ["Kubernetes"])
        self.assertEqual(skills["languages"][0], "python")
        for language in MUST_HAVE_LANGUAGES:
            self.assertIn(language.lower(), [item.lower() for item in skills["languages"]])
        self.assertEqual(len(skills["languages"]), len(MUST_HAVE_LANGUAGES))

    def test_parsed_policy_without_skills_still_lists_must_haves(self):
        skills = bucketize_skills(None, "parsed")
        self.assertEqual(skills["languages"], list(MUST_HAVE_LANGUAGES))

    def test_bucketizing_twice_is_stable(self):
        raw = RawSkills(technical=["React", "Go", "Docker", "Kafka"], languages=["Git"], soft=["Teamwork"])
        once = bucketize_skills(raw, "tailored")
        self.assertEqual(bucketize_skills(RawSkills(**once), "tailored"), once)


class ClassifySkillTests(unittest.TestCase):
    def test_lookup_is_case_insensitive(self):
        self.assertEqual(classify_skill("  Next.js "), "frameworks")
        self.assertEqual(classify_skill("CI/CD"), "tools")
        self.assertEqual(classify_skill("C#"), "languages")
        self.assertEqual(classify_skill("GraphQL"), "other")

    def test_add_skill_does_not_mutate_input(self):
        skills = {"tools": ["Git"]}
        updated = add_skill(skills, "Docker")
        self.assertEqual(skills, {"tools": ["Git"]})
        self.assertEqual(updated["tools"], ["Git", "Docker"])


if __name__ == "__main__":
    unittest.main()
