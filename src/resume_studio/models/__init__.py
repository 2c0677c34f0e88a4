"""Data models for the resume builder and analyzer."""

from resume_studio.models.analysis import AnalysisResult, Keyword, ScoreBreakdown, SkillGap
from resume_studio.models.resume import Education, Experience, Project, ResumeData

__all__ = [
    "AnalysisResult",
    "Education",
    "Experience",
    "Keyword",
    "Project",
    "ResumeData",
    "ScoreBreakdown",
    "SkillGap",
]
