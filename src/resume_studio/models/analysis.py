"""Pydantic models for ATS analysis output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScoreBreakdown(BaseModel):
    category: str  # e.g. "Keyword Optimization", "Impact Quantification"
    score: int = Field(ge=0, le=100)


class Keyword(BaseModel):
    keyword: str
    frequency: int = 0


class SkillGap(BaseModel):
    skill: str
    importance: int = Field(ge=1, le=5)
    category: str = ""  # "Technical", "Soft Skill", ...


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ats_score: int = Field(alias="atsScore", ge=0, le=100)
    score_breakdown: list[ScoreBreakdown] = Field(alias="scoreBreakdown")
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    keywords: list[Keyword] = Field(default_factory=list)
    skills_gap: list[SkillGap] = Field(default_factory=list, alias="skillsGap")
