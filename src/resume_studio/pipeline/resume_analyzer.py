"""Resume Analyzer: ATS scoring and feedback-driven rewriting."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_studio.clients.llm_client import DEFAULT_MODEL, TextCompletionService
from resume_studio.errors import CompletionError
from resume_studio.models.analysis import AnalysisResult
from resume_studio.models.resume import ResumeData
from resume_studio.pipeline.resume_builder import RESUME_DATA_SCHEMA, parse_resume_data

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """\
Analyze the following resume text and provide a detailed review in JSON format.
- Calculate an overall ATS score (0-100).
- Break down the score into categories: 'Keyword Optimization', 'Impact Quantification', \
'Format Clarity', and 'Skill Coverage'.
- Identify 3 key strengths.
- Identify 3 key weaknesses.
- Provide 3 actionable suggestions for improvement.
- Extract the top 10-15 most frequent and relevant keywords.
- Identify 5-10 important missing skills, assigning an importance score from 1-5.

Resume Text:
---
{resume}
---

Respond with JSON only:
{{
  "atsScore": 0,
  "scoreBreakdown": [{{"category": "", "score": 0}}],
  "strengths": [], "weaknesses": [], "suggestions": [],
  "keywords": [{{"keyword": "", "frequency": 0}}],
  "skillsGap": [{{"skill": "", "importance": 1, "category": "Technical"}}]
}}"""

RECTIFY_PROMPT = """\
You are an expert resume writer and an ATS optimization specialist. Rewrite the resume below \
to address all of the feedback, then parse the improved content into a structured JSON object.

Original Resume Text:
---
{resume}
---

Analysis and Feedback to Implement:
---
- Key Weaknesses to Fix: {weaknesses}
- Actionable Suggestions to Apply: {suggestions}
- Missing Skills to Incorporate: {missing}
---

Instructions:
1. Fix every weakness and apply every suggestion.
2. Weave the missing skills naturally into summary, skills, experience and projects.
3. Rewrite experience and project descriptions with the STAR method; every bullet ends with a \
quantifiable result.
4. Rewrite each project description as 2-4 distinct, quantified bullet points.
5. Use strong, confident action verbs and keep the text free of grammatical errors.

Combine skills and technologies into single comma-separated strings and all responsibilities of \
one role into one string. Respond with the JSON object only, using exactly these keys:
{schema}"""


class ResumeAnalyzer:
    def __init__(
        self,
        llm: TextCompletionService,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.6,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature

    async def analyze(self, resume_text: str) -> AnalysisResult:
        """Score a resume against ATS heuristics."""
        try:
            data = await self.llm.generate_json(
                prompt=ANALYSIS_PROMPT.format(resume=resume_text),
                model=self.model,
            )
        except Exception as exc:
            raise CompletionError(f"Failed to analyze resume: {exc}") from exc

        if not isinstance(data, dict) or not data:
            raise CompletionError("Failed to analyze resume: the AI returned an empty analysis")
        if not data.get("atsScore") or not data.get("scoreBreakdown"):
            raise CompletionError("Failed to analyze resume: the AI analysis was incomplete")
        try:
            result = AnalysisResult.model_validate(data)
        except ValidationError as exc:
            raise CompletionError(f"Failed to analyze resume: {exc}") from exc
        logger.info("ATS score: %d", result.ats_score)
        return result

    async def rectify(self, resume_text: str, analysis: AnalysisResult) -> ResumeData:
        """Rewrite the resume to address the analysis and return structured data."""
        prompt = RECTIFY_PROMPT.format(
            resume=resume_text,
            weaknesses="; ".join(analysis.weaknesses),
            suggestions="; ".join(analysis.suggestions),
            missing=", ".join(gap.skill for gap in analysis.skills_gap),
            schema=RESUME_DATA_SCHEMA,
        )
        try:
            data = await self.llm.generate_json(
                prompt=prompt,
                model=self.model,
                temperature=self.temperature,
            )
        except Exception as exc:
            raise CompletionError(f"Failed to improve resume: {exc}") from exc
        return parse_resume_data(data, "Failed to improve resume")
