"""Map an invitee's question/answer list onto the candidate database schema.

Two lookup strategies are supported. ``keyword`` (the default) takes the
first answer whose question contains the field's keyword, ignoring case, so
the booking form can be reordered freely. ``positional`` reads the answer at
the field's fixed 1-based position, which is how the first version of the
booking form was wired. Both return ``""`` for a missing answer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from .schemas import AnswerEntry, InviteePayload


KEYWORD = "keyword"
POSITIONAL = "positional"
LOOKUP_STRATEGIES = (KEYWORD, POSITIONAL)

NAME_PLACEHOLDER = "Unbekannt"
INITIAL_STATUS = "Neu eingegangen"
LINKEDIN_MARKER = "linkedin.com"

EMPLOYMENT_TYPES = ["ANÜ", "Festanstellung", "Freelance"]
CONTRACT_FORMS = ["Unbefristet", "Befristet", "Projektarbeit"]
WORK_TIMES = ["Vollzeit", "Teilzeit", "Flexibel"]
WORK_LOCATIONS = ["Remote", "Hybrid", "Vor Ort", "Flexibel"]


@dataclass(frozen=True)
class AnswerField:
    prop: str
    keyword: str
    position: int


POSITION = AnswerField("Position", "position", 1)
NOTICE_PERIOD = AnswerField("Kündigungsfrist", "kündigung", 2)
REGION = AnswerField("Gesuchte Region", "region", 3)
SALARY = AnswerField("Gehaltsvorstellung", "gehalt", 4)
EMPLOYMENT_TYPE = AnswerField("Beschäftigungsverhältnis", "beschäftigung", 5)
WORK_TIME = AnswerField("Arbeitszeit", "arbeitszeit", 6)
WORK_LOCATION = AnswerField("Home-Office", "home", 7)
CONTRACT_FORM = AnswerField("Vertragsform", "vertrag", 8)
LINKEDIN_URL = AnswerField("LinkedIn URL", "linkedin", 9)


@dataclass
class CandidateApplication:
    name: str
    email: str | None
    position: str = ""
    notice_period: str = ""
    region: str = ""
    salary: str = ""
    employment_types: list[str] = field(default_factory=list)
    contract_forms: list[str] = field(default_factory=list)
    work_time: str | None = None
    work_location: str | None = None
    linkedin_url: str | None = None


def get_answer(entries: Sequence[AnswerEntry], spec: AnswerField, strategy: str = KEYWORD) -> str:
    if strategy == POSITIONAL:
        idx = spec.position - 1
        return entries[idx].answer if 0 <= idx < len(entries) else ""
    if strategy != KEYWORD:
        raise ValueError(f"unknown answer lookup strategy '{strategy}'")
    needle = spec.keyword.lower()
    for entry in entries:
        if needle in entry.question.lower():
            return entry.answer
    return ""


def select_many(raw: str, allowed: Iterable[str]) -> list[str]:
    """Comma-separated answer -> allow-listed values, in the order given."""
    allowed_set = set(allowed)
    return [part.strip() for part in raw.split(",") if part.strip() in allowed_set]


def select_one(raw: str, allowed: Iterable[str]) -> str | None:
    """First allow-listed value contained in the answer, ignoring case."""
    lowered = raw.lower()
    for option in allowed:
        if option.lower() in lowered:
            return option
    return None


def linkedin_url_or_none(raw: str) -> str | None:
    raw = raw.strip()
    return raw if raw and LINKEDIN_MARKER in raw else None


def extract_application(payload: InviteePayload, strategy: str = KEYWORD) -> CandidateApplication:
    entries = payload.questions_and_answers

    def answer(spec: AnswerField) -> str:
        return get_answer(entries, spec, strategy).strip()

    return CandidateApplication(
        name=(payload.name or "").strip() or NAME_PLACEHOLDER,
        email=(payload.email or "").strip() or None,
        position=answer(POSITION),
        notice_period=answer(NOTICE_PERIOD),
        region=answer(REGION),
        salary=answer(SALARY),
        employment_types=select_many(answer(EMPLOYMENT_TYPE), EMPLOYMENT_TYPES),
        contract_forms=select_many(answer(CONTRACT_FORM), CONTRACT_FORMS),
        work_time=select_one(answer(WORK_TIME), WORK_TIMES),
        work_location=select_one(answer(WORK_LOCATION), WORK_LOCATIONS),
        linkedin_url=linkedin_url_or_none(answer(LINKEDIN_URL)),
    )


# Notion property value shapes

def title(text: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": text}}]}


def rich_text(text: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": text}}]}


def email(value: str | None) -> dict[str, Any]:
    return {"email": value}


def select(name: str) -> dict[str, Any]:
    return {"select": {"name": name}}


def multi_select(names: Iterable[str]) -> dict[str, Any]:
    return {"multi_select": [{"name": n} for n in names]}


def url(value: str) -> dict[str, Any]:
    return {"url": value}


def status(name: str) -> dict[str, Any]:
    return {"status": {"name": name}}


def build_properties(app: CandidateApplication) -> dict[str, Any]:
    props: dict[str, Any] = {
        "Name": title(app.name),
        "E-Mail": email(app.email),
        POSITION.prop: rich_text(app.position),
        NOTICE_PERIOD.prop: rich_text(app.notice_period),
        REGION.prop: rich_text(app.region),
        SALARY.prop: rich_text(app.salary),
        "Pipeline Status": status(INITIAL_STATUS),
    }
    if app.employment_types:
        props[EMPLOYMENT_TYPE.prop] = multi_select(app.employment_types)
    if app.work_time:
        props[WORK_TIME.prop] = select(app.work_time)
    if app.work_location:
        props[WORK_LOCATION.prop] = select(app.work_location)
    if app.contract_forms:
        props[CONTRACT_FORM.prop] = multi_select(app.contract_forms)
    if app.linkedin_url:
        props[LINKEDIN_URL.prop] = url(app.linkedin_url)
    return props
