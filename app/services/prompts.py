from __future__ import annotations

import json
from typing import Any

PARSE_RESUME_PROMPT = """You are an expert resume parser. Extract ALL structured data from the resume text provided.

Look for common section headers (EDUCATION, EXPERIENCE, SKILLS, PROJECTS, CERTIFICATIONS and their variants).

PARSING RULES:
1. Always output valid JSON.
2. Extract every work experience and education entry, not just the first one.
3. Parse all bullet points as highlights for their position, project or education entry.
4. If information is missing, use "Unknown" for required fields.
5. Use null or omit endDate for current positions.

Output ONLY valid JSON matching this schema:
{
  "contact": {"name": "string", "email": "string", "phone": "string", "location": "string",
              "linkedin": "url", "github": "url", "website": "url"},
  "summary": "string",
  "experience": [{"company": "string", "title": "string", "location": "string",
                  "startDate": "string", "endDate": "string or null", "highlights": ["string"]}],
  "education": [{"institution": "string", "degree": "string", "field": "string", "location": "string",
                 "startDate": "string", "endDate": "string", "gpa": "string", "highlights": ["string"]}],
  "skills": {"technical": [], "languages": [], "frameworks": [], "tools": [], "soft": [], "other": []},
  "projects": [{"name": "string", "description": "string", "url": "url",
                "technologies": ["string"], "highlights": ["string"]}],
  "certifications": [{"name": "string", "issuer": "string", "date": "string"}],
  "_parseWarnings": ["sections that were unclear or may need review"]
}"""

EXTRACT_JOB_DESCRIPTION_PROMPT = """Extract key signals from this job description.

Output ONLY valid JSON:
{
  "title": "Job title",
  "company": "Company name (if mentioned)",
  "requiredSkills": ["skill"],
  "preferredSkills": ["skill"],
  "requiredExperience": "e.g., 3+ years",
  "responsibilities": ["responsibility"],
  "keywords": ["important keywords from the JD"]
}"""

TAILOR_RESUME_PROMPT = """You are a professional resume writer. Rewrite and tailor the candidate's resume to the job description.

RULES:
- Never invent employers, job titles, degrees or certifications that are not in the original resume.
- Keep each position to at most 4 achievement-focused bullets; lead with a quantified result.
- Write a 2-4 sentence summary.
- Every keyword in "selectedKeywords" must appear in the summary, an experience bullet or the skills section.
- Put technical skills into skills.languages, skills.frameworks, skills.tools or skills.other; do not list soft skills.
- matchedKeywords lists all selectedKeywords plus any other keywords you incorporated.
- missingKeywords lists only keywords NOT in selectedKeywords that could not be incorporated.

Output ONLY valid JSON with the keys: contact, summary, experience, education, skills, projects,
certifications, matchedKeywords, missingKeywords (same field names as the input parsedResume)."""

COVER_LETTER_PROMPT = """You are a career coach. Write a concise, tailored cover letter from the resume data and job description.

RULES:
- 3-5 short paragraphs, professional but warm.
- Do not invent experience, employers or qualifications.
- Output ONLY valid JSON: {"coverLetter": "string"}"""


def build_tailor_payload(
    parsed_resume: dict[str, Any],
    job_description: dict[str, Any],
    selected_keywords: list[str],
) -> str:
    return json.dumps(
        {
            "parsedResume": parsed_resume,
            "jobDescription": job_description,
            "selectedKeywords": selected_keywords,
        },
        ensure_ascii=False,
    )


def build_cover_letter_payload(tailored_resume: dict[str, Any], job_description: str) -> str:
    return json.dumps({"resume": tailored_resume, "jobDescription": job_description}, ensure_ascii=False)
