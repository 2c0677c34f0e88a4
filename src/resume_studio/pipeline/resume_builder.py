"""Resume Builder: turns structured candidate data into ATS-optimised Markdown."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_studio.clients.llm_client import DEFAULT_MODEL, TextCompletionService
from resume_studio.errors import CompletionError
from resume_studio.models.resume import ResumeData
from resume_studio.utils.json_parser import strip_code_fences

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a world-class resume writing AI and an expert on Applicant Tracking \
Systems (ATS). You write resumes that score 95 or higher on major ATS \
platforms such as Greenhouse, Lever and Taleo."""

WRITE_INSTRUCTIONS = """\
Instructions for ATS-Optimized Resume Generation (Target: 95+ Score):
1. **Impact-Oriented Experience**: Every bullet under "Experience" follows the STAR method \
(Situation, Task, Action, Result), starts with a strong action verb and quantifies the result.
2. **Project Case Studies**: Turn each project description into 2-4 quantified STAR bullet points. \
After the bullets of each project add a line formatted exactly as '**Technologies:**' followed by \
a comma-separated list of the technologies used.
3. **Strategic Keyword Saturation**: Identify the hard skills, soft skills and terminology critical \
for the target role and weave them naturally through "Summary", "Skills" and "Experience".
4. **ATS-Friendly Formatting**: Clean, single-column Markdown only.
   - Use only these section headers: "## Summary", "## Skills", "## Experience", "## Projects", "## Education".
   - Use simple hyphens (-) for all bullet points. No other symbols.
   - No tables, multiple columns or complex indentation.
5. **Header**: The first line is the candidate's name, the second line is a single line of contact \
information.

Output only the resume Markdown."""

KEYWORDS_PROMPT = """\
Based on the following resume, which is tailored for the target role of "{role}", suggest \
10-15 highly relevant keywords and short phrases that would help it pass an Applicant \
Tracking System and complement the skills already present.

Resume Text:
---
{resume}
---

Respond with JSON only: {{"keywords": ["keyword 1", "keyword 2"]}}"""

IMPORT_PROMPT = """\
Parse the following resume text and extract the information into a structured JSON object.
Infer the sections (summary, skills, experience, education, projects) and populate the fields.
For skills and technologies, combine them into a single comma-separated string.
For experience responsibilities, combine all bullet points for a single role into one string.

Resume Text:
---
{resume}
---

Respond with JSON only, using exactly these keys:
{schema}"""

RESUME_DATA_SCHEMA = """\
{
  "fullName": "", "email": "", "phone": "", "linkedIn": "full URL if found",
  "summary": "", "skills": "comma-separated",
  "experience": [{"role": "", "company": "", "duration": "", "responsibilities": ""}],
  "education": [{"degree": "", "institution": "", "graduationYear": ""}],
  "projects": [{"name": "", "description": "", "technologies": "comma-separated"}]
}"""

SECTION_ORDER = ("summary", "skills", "experience", "projects", "education")


def format_candidate(data: ResumeData) -> str:
    """Render candidate facts as the prompt block the writer works from."""
    contact = data.contact_line
    experience = "\n".join(
        f"- Role: {e.role} at {e.company} ({e.duration})\n  Responsibilities: {e.responsibilities}"
        for e in data.experience
    )
    education = "\n".join(
        f"- {e.degree}, {e.institution} ({e.graduation_year})" for e in data.education
    )
    projects = "\n".join(
        f"- Project: {p.name}\n  Description: {p.description}\n  Technologies: {p.technologies}"
        for p in data.projects
    )
    return (
        f"- Full Name: {data.full_name}\n"
        f"- Contact: {contact}\n"
        f"- Professional Summary: {data.summary}\n"
        f"- Skills: {data.skills}\n"
        f"- Experience:\n{experience}\n"
        f"- Education:\n{education}\n"
        f"- Projects:\n{projects}"
    )


def resume_data_to_markdown(data: ResumeData) -> str:
    """Lay out structured data in the resume Markdown dialect, without AI."""
    sections: dict[str, list[str]] = {key: [] for key in SECTION_ORDER}
    if data.summary.strip():
        sections["summary"].append(data.summary.strip())
    skills = [s.strip() for s in data.skills.split(",") if s.strip()]
    sections["skills"].extend(f"- {s}" for s in skills)
    for e in data.experience:
        heading = f"**{e.role}**, {e.company}"
        if e.duration:
            heading += f" ({e.duration})"
        sections["experience"].append(heading)
        sections["experience"].extend(_bullets(e.responsibilities))
    for p in data.projects:
        sections["projects"].append(f"**{p.name}**")
        sections["projects"].extend(_bullets(p.description))
        if p.technologies.strip():
            sections["projects"].append(f"**Technologies:** {p.technologies.strip()}")
    for e in data.education:
        line = f"- {e.degree}, {e.institution}"
        if e.graduation_year:
            line += f" ({e.graduation_year})"
        sections["education"].append(line)

    parts = [data.full_name.strip(), data.contact_line]
    for key in SECTION_ORDER:
        if sections[key]:
            parts.append(f"## {key.capitalize()}")
            parts.append("\n".join(sections[key]))
    return "\n".join(parts) + "\n"


def _bullets(text: str) -> list[str]:
    lines = [line.strip().lstrip("-*").strip() for line in text.splitlines()]
    return [f"- {line}" for line in lines if line]


class ResumeBuilder:
    def __init__(
        self,
        llm: TextCompletionService,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.5,
        keyword_model: str | None = None,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.keyword_model = keyword_model or model

    async def write(self, resume_data: ResumeData, target_role: str) -> str:
        """Generate resume Markdown tailored to ``target_role``."""
        prompt = (
            f'Based on the following information, generate a professional resume tailored for '
            f'the target role of "{target_role}".\n\n'
            f"Candidate Information:\n{format_candidate(resume_data)}\n\n{WRITE_INSTRUCTIONS}"
        )
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
            )
        except Exception as exc:
            raise CompletionError(f"Failed to generate resume: {exc}") from exc

        markdown = strip_code_fences(response.text)
        if not markdown:
            raise CompletionError("Failed to generate resume: the AI returned an empty reply")
        return markdown

    async def suggest_keywords(self, resume_text: str, target_role: str) -> list[str]:
        """Suggest ATS keywords; returns an empty list on any failure."""
        try:
            data = await self.llm.generate_json(
                prompt=KEYWORDS_PROMPT.format(role=target_role, resume=resume_text),
                model=self.keyword_model,
            )
        except Exception:
            logger.warning("Keyword suggestion failed", exc_info=True)
            return []
        if not isinstance(data, dict):
            return []
        return [str(k) for k in data.get("keywords", []) if str(k).strip()]

    async def import_resume(self, resume_text: str) -> ResumeData:
        """Extract structured data from plain resume text."""
        try:
            data = await self.llm.generate_json(
                prompt=IMPORT_PROMPT.format(resume=resume_text, schema=RESUME_DATA_SCHEMA),
                model=self.model,
            )
        except Exception as exc:
            raise CompletionError(f"Failed to import data from resume: {exc}") from exc
        return parse_resume_data(data, "Failed to import data from resume")


def parse_resume_data(data: dict | list, context: str) -> ResumeData:
    """Validate a completion reply as ResumeData or raise CompletionError."""
    if not isinstance(data, dict) or not data:
        raise CompletionError(f"{context}: the AI could not understand the resume")
    try:
        return ResumeData.model_validate(data)
    except ValidationError as exc:
        raise CompletionError(f"{context}: {exc}") from exc
