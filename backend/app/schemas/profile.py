"""
DevConnector Backend - Profile Schemas
======================================

What:  Request bodies for the profile upsert and the experience/education
       sub-entities, plus the profile response.

Field naming:
    The wire format uses `from` for start dates. `from` is a Python keyword,
    so the attribute is `from_` with alias "from"; FastAPI serializes by alias.

Required fields on experience/education bodies are deliberately Optional here:
the mutation engine owns those rules and reports every missing field at once.
Malformed dates still fail at parse time (→ 400).

Request dates accept a plain date ("2020-01-01") or a full ISO datetime
("2020-01-01T10:00:00Z"); only the calendar date is kept.
"""

from datetime import date, datetime
from typing import Annotated, Dict, List, Optional, Union

from pydantic import AfterValidator, BaseModel, Field

from app.schemas.user import UserSummary

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _calendar_date(value: Union[datetime, date]) -> date:
    return value.date() if isinstance(value, datetime) else value


EntryDate = Annotated[Union[datetime, date], AfterValidator(_calendar_date)]


class ProfileRequest(BaseModel):
    """
    Create-or-update body for POST /api/profile.

    skills accepts a list or a comma-separated string ("python, sql").
    """
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[Union[List[str], str]] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceRequest(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_: Optional[EntryDate] = Field(default=None, alias="from")
    to: Optional[EntryDate] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class EducationRequest(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_: Optional[EntryDate] = Field(default=None, alias="from")
    to: Optional[EntryDate] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class ExperienceItem(BaseModel):
    id: str
    title: str
    company: str
    location: Optional[str] = None
    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class EducationItem(BaseModel):
    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class ProfileResponse(BaseModel):
    """A profile with its owner's name and avatar populated."""
    id: str
    user: UserSummary
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: str
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: Dict[str, str] = Field(default_factory=dict)
    experience: List[ExperienceItem] = Field(default_factory=list)
    education: List[EducationItem] = Field(default_factory=list)
    date: datetime

    model_config = {"from_attributes": True}
