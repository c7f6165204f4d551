"""
DevConnector Backend: Profile Schemas
======================================

What:  API contract for profiles and their embedded experience entries.

Request shape (POST /api/profile) is flat, the way the web form posts it:
    {"status": "Developer", "skills": "Python, Go", "twitter": "...", ...}
The service folds the social fields into the `social` sub-object.

Response shape nests the owner and the embedded collections:
    {"id", "user": {"id", "name", "avatar"}, "status", "skills": [...],
     "social": {...} | null, "experience": [...], ...}
"""

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from devconnector.validation import is_empty, require, split_skills

SOCIAL_NETWORKS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProfileRequest(BaseModel):
    """Body of POST /api/profile (create or update)."""
    status: Optional[str] = Field(default=None, validate_default=True)
    skills: Optional[List[str]] = Field(default=None, validate_default=True)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_required(cls, value):
        return require(value, "Status is required")

    @field_validator("skills", mode="before")
    @classmethod
    def _skills_required(cls, value):
        return require(split_skills(value), "Skills is required")


class ExperienceRequest(BaseModel):
    """Body of PUT /api/profile/experience."""
    title: Optional[str] = Field(default=None, validate_default=True)
    company: Optional[str] = Field(default=None, validate_default=True)
    from_date: Optional[date] = Field(default=None, alias="from", validate_default=True)
    to: Optional[date] = None
    location: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}

    @field_validator("title", mode="before")
    @classmethod
    def _title_required(cls, value):
        return require(value, "Title is required")

    @field_validator("company", mode="before")
    @classmethod
    def _company_required(cls, value):
        return require(value, "Company is required")

    @field_validator("from_date", mode="before")
    @classmethod
    def _from_required(cls, value):
        return require(value, "From date is required")

    @field_validator("to", mode="before")
    @classmethod
    def _blank_to_is_none(cls, value):
        # Forms send "" for an ongoing position
        return None if is_empty(value) else value


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProfileOwner(BaseModel):
    id: uuid.UUID
    name: str
    avatar: str

    model_config = {"from_attributes": True}


class SocialLinks(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceEntry(BaseModel):
    id: str
    title: str
    company: str
    from_date: date = Field(alias="from")
    to: Optional[date] = None
    location: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class ProfileResponse(BaseModel):
    id: uuid.UUID
    user: ProfileOwner
    status: str
    skills: List[str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Optional[SocialLinks] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}
