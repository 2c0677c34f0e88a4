"""Pydantic models for structured resume data exchanged with the completion service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Experience(_CamelModel):
    role: str
    company: str
    duration: str = ""
    responsibilities: str = ""


class Education(_CamelModel):
    degree: str
    institution: str
    graduation_year: str = Field("", alias="graduationYear")


class Project(_CamelModel):
    name: str
    description: str = ""
    technologies: str = ""  # comma-separated


class ResumeData(_CamelModel):
    full_name: str = Field(alias="fullName")
    email: str = ""
    phone: str = ""
    linked_in: str = Field("", alias="linkedIn")
    summary: str = ""
    skills: str = ""  # comma-separated
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)

    @property
    def contact_line(self) -> str:
        return " | ".join(part for part in (self.email, self.phone, self.linked_in) if part)
