"""Tests for answer lookup and Notion property construction."""

import pytest

from conftest import FULL_ANSWERS, qa
from intake.mapping import (
    EMPLOYMENT_TYPES,
    LINKEDIN_URL,
    NAME_PLACEHOLDER,
    POSITION,
    POSITIONAL,
    WORK_LOCATIONS,
    build_properties,
    extract_application,
    get_answer,
    linkedin_url_or_none,
    select_many,
    select_one,
)
from intake.schemas import AnswerEntry, InviteePayload


def _payload(answers=None, name="Max Mustermann", email="max@example.com") -> InviteePayload:
    return InviteePayload.model_validate(
        {"name": name, "email": email, "questions_and_answers": answers if answers is not None else FULL_ANSWERS}
    )


class TestGetAnswer:
    def test_keyword_is_case_insensitive_substring(self) -> None:
        entries = [AnswerEntry(question="Dein LINKEDIN Profil", answer="x")]
        assert get_answer(entries, LINKEDIN_URL) == "x"

    def test_keyword_ignores_order(self) -> None:
        entries = [AnswerEntry(**e) for e in reversed(FULL_ANSWERS)]
        assert get_answer(entries, POSITION) == "Backend Engineer"

    def test_keyword_first_match_wins(self) -> None:
        entries = [AnswerEntry(question="Position A", answer="first"), AnswerEntry(question="Position B", answer="second")]
        assert get_answer(entries, POSITION) == "first"

    def test_missing_answer_is_empty_string(self) -> None:
        assert get_answer([], POSITION) == ""
        assert get_answer([], POSITION, POSITIONAL) == ""

    def test_positional_uses_one_based_index(self) -> None:
        entries = [AnswerEntry(question=f"Frage {i}", answer=f"a{i}") for i in range(1, 10)]
        assert get_answer(entries, POSITION, POSITIONAL) == "a1"
        assert get_answer(entries, LINKEDIN_URL, POSITIONAL) == "a9"

    def test_unknown_strategy_raises(self) -> None:
        with pytest.raises(ValueError, match="unknown answer lookup strategy"):
            get_answer([], POSITION, "fuzzy")


class TestSelection:
    def test_multi_select_keeps_allowed_values(self) -> None:
        assert select_many("ANÜ, Freelance, Invalid", EMPLOYMENT_TYPES) == ["ANÜ", "Freelance"]

    def test_multi_select_without_valid_values(self) -> None:
        assert select_many("Praktikum, Werkstudent", EMPLOYMENT_TYPES) == []

    def test_single_select_substring_match(self) -> None:
        assert select_one("Ich arbeite gerne hybrid", WORK_LOCATIONS) == "Hybrid"

    def test_single_select_first_allowed_wins(self) -> None:
        assert select_one("remote oder hybrid", WORK_LOCATIONS) == "Remote"

    def test_single_select_no_match(self) -> None:
        assert select_one("egal", WORK_LOCATIONS) is None

    def test_linkedin_url(self) -> None:
        assert linkedin_url_or_none("https://linkedin.com/in/x") == "https://linkedin.com/in/x"
        assert linkedin_url_or_none("https://example.com") is None
        assert linkedin_url_or_none("") is None


class TestBuildProperties:
    def test_full_application(self) -> None:
        props = build_properties(extract_application(_payload()))
        assert props["Name"] == {"title": [{"text": {"content": "Max Mustermann"}}]}
        assert props["E-Mail"] == {"email": "max@example.com"}
        assert props["Position"] == {"rich_text": [{"text": {"content": "Backend Engineer"}}]}
        assert props["Kündigungsfrist"]["rich_text"][0]["text"]["content"] == "3 Monate"
        assert props["Gesuchte Region"]["rich_text"][0]["text"]["content"] == "München"
        assert props["Gehaltsvorstellung"]["rich_text"][0]["text"]["content"] == "85.000 €"
        assert props["Beschäftigungsverhältnis"] == {"multi_select": [{"name": "Festanstellung"}, {"name": "Freelance"}]}
        assert props["Arbeitszeit"] == {"select": {"name": "Vollzeit"}}
        assert props["Home-Office"] == {"select": {"name": "Hybrid"}}
        assert props["Vertragsform"] == {"multi_select": [{"name": "Unbefristet"}]}
        assert props["LinkedIn URL"] == {"url": "https://www.linkedin.com/in/max-mustermann"}
        assert props["Pipeline Status"] == {"status": {"name": "Neu eingegangen"}}

    @pytest.mark.parametrize("email", ["", None])
    def test_missing_email_is_null(self, email) -> None:
        props = build_properties(extract_application(_payload(email=email)))
        assert props["E-Mail"] == {"email": None}

    def test_missing_name_uses_placeholder(self) -> None:
        app = extract_application(_payload(name=None))
        assert app.name == NAME_PLACEHOLDER

    def test_optional_properties_omitted(self) -> None:
        answers = [
            qa("Beschäftigungsverhältnis", "Praktikum"),
            qa("Arbeitszeit", "egal"),
            qa("LinkedIn", "https://example.com/max"),
        ]
        props = build_properties(extract_application(_payload(answers)))
        for key in ("Beschäftigungsverhältnis", "Arbeitszeit", "Home-Office", "Vertragsform", "LinkedIn URL"):
            assert key not in props
        assert props["Position"] == {"rich_text": [{"text": {"content": ""}}]}

    def test_positional_lookup(self) -> None:
        answers = [qa(f"Frage {i}", a["answer"]) for i, a in enumerate(FULL_ANSWERS, start=1)]
        app = extract_application(_payload(answers), POSITIONAL)
        assert app.position == "Backend Engineer"
        assert app.work_location == "Hybrid"
        assert app.linkedin_url == "https://www.linkedin.com/in/max-mustermann"

    def test_null_answers_are_empty(self) -> None:
        payload = InviteePayload.model_validate(
            {"name": "Max", "questions_and_answers": [{"question": "Position", "answer": None}]}
        )
        assert extract_application(payload).position == ""
