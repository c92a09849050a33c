from __future__ import annotations

# Scraper actors disagree on key names; everything below the normalizer
# works on LinkedInProfile only.

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Experience:
    company: str = ""
    title: str = ""
    duration: str = ""
    location: str = ""
    description: str = ""


@dataclass
class Education:
    school: str = ""
    degree: str = ""
    period: str = ""


@dataclass
class LinkedInProfile:
    full_name: str = ""
    headline: str = ""
    summary: str = ""
    location: str = ""
    experiences: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)


def _first_str(raw: dict[str, Any], *keys: str) -> str:
    for key in keys:
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return ""


def _first_list(raw: dict[str, Any], *keys: str) -> list[Any]:
    for key in keys:
        val = raw.get(key)
        if isinstance(val, list) and val:
            return val
    return []


def _period(raw: dict[str, Any]) -> str:
    text = _first_str(raw, "duration", "caption", "dateRange", "timePeriod", "period")
    if text:
        return text
    start = _first_str(raw, "startDate", "start", "start_date")
    end = _first_str(raw, "endDate", "end", "end_date")
    if start or end:
        return f"{start or '?'} - {end or 'heute'}"
    return ""


def _normalize_experience(raw: dict[str, Any]) -> Experience:
    return Experience(
        company=_first_str(raw, "company", "companyName", "subtitle", "organization"),
        title=_first_str(raw, "title", "position", "jobTitle"),
        duration=_period(raw),
        location=_first_str(raw, "location", "metadata"),
        description=_first_str(raw, "description", "summary"),
    )


def _normalize_education(raw: dict[str, Any]) -> Education:
    return Education(
        school=_first_str(raw, "school", "schoolName", "title", "name"),
        degree=_first_str(raw, "degree", "degreeName", "subtitle"),
        period=_period(raw),
    )


def normalize_profile(raw: dict[str, Any]) -> LinkedInProfile:
    full_name = _first_str(raw, "fullName", "full_name")
    if not full_name:
        full_name = " ".join(p for p in (_first_str(raw, "firstName", "first_name"), _first_str(raw, "lastName", "last_name")) if p)
    if not full_name:
        full_name = _first_str(raw, "name")

    experiences = [
        exp
        for exp in (_normalize_experience(e) for e in _first_list(raw, "experiences", "experience", "positions") if isinstance(e, dict))
        if exp.company or exp.title
    ]
    education = [
        _normalize_education(e)
        for e in _first_list(raw, "educations", "education")
        if isinstance(e, dict)
    ]
    skills: list[str] = []
    for s in _first_list(raw, "skills", "topSkills"):
        name = s.get("title") or s.get("name") if isinstance(s, dict) else s
        if isinstance(name, str) and name.strip():
            skills.append(name.strip())

    return LinkedInProfile(
        full_name=full_name,
        headline=_first_str(raw, "headline", "occupation", "jobTitle"),
        summary=_first_str(raw, "about", "summary"),
        location=_first_str(raw, "addressWithCountry", "location", "geoLocationName", "addressWithoutCountry"),
        experiences=experiences,
        education=education,
        skills=skills,
    )
