"""Shared fixtures: settings with dummy credentials and fake outbound APIs."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from intake.config import Settings
from intake.context import AppContext, build_context


SAMPLE_PROFILE: Dict[str, Any] = {
    "fullName": "Max Mustermann",
    "headline": "Senior Backend Engineer | Python | Cloud",
    "about": "Backend-Entwickler mit 10 Jahren Erfahrung in verteilten Systemen.",
    "addressWithCountry": "München, Bayern, Deutschland",
    "experiences": [
        {"companyName": "ACME GmbH", "title": "Senior Backend Engineer", "caption": "Jan. 2020 - heute · 4 J."},
        {"company": "Beispiel AG", "position": "Software Engineer", "duration": "3 J. 2 Mon."},
        {"subtitle": "Startup XY"},
    ],
    "educations": [{"title": "TU München", "subtitle": "M.Sc. Informatik", "caption": "2010 - 2013"}],
    "skills": [{"title": "Python"}, {"title": "Kubernetes"}, "PostgreSQL"],
}


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "notion_api_key": "secret_notion",
        "notion_database_id": "db-1",
        "apify_token": "apify-token",
        "apify_actor_id": "dev_fusion~linkedin-profile-scraper",
        "apify_input_key": "profileUrls",
        "openrouter_api_key": "or-key",
        "poll_interval_seconds": 0,
        "poll_max_attempts": 30,
        "summary_max_tokens": 512,
        "answer_lookup": "keyword",
        "cors_origins": ["*"],
        "webhook_path": "/api/calendly-webhook",
    }
    values.update(overrides)
    return Settings(**values)


class FakeApis:
    """One MockTransport handler standing in for Notion, Apify and OpenRouter."""

    def __init__(
        self,
        *,
        statuses: Optional[List[str]] = None,
        items: Optional[List[Dict[str, Any]]] = None,
        run_id: Optional[str] = "run-1",
        dataset_id: Optional[str] = "ds-1",
        summary: str = "Kurzprofil: erfahrener Backend-Entwickler.",
        notion_create_status: int = 200,
        start_run_status: int = 201,
    ) -> None:
        self.statuses = statuses or ["SUCCEEDED"]
        self.items = [SAMPLE_PROFILE] if items is None else items
        self.run_id = run_id
        self.dataset_id = dataset_id
        self.summary = summary
        self.notion_create_status = notion_create_status
        self.start_run_status = start_run_status
        self.requests: List[httpx.Request] = []
        self.polls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host, path, method = request.url.host, request.url.path, request.method
        if host == "api.notion.com":
            if method == "POST" and path == "/v1/pages":
                if self.notion_create_status != 200:
                    return httpx.Response(self.notion_create_status, json={"object": "error", "message": "validation_error"})
                return httpx.Response(200, json={"object": "page", "id": "page-123"})
            if method == "PATCH" and path.startswith("/v1/pages/"):
                return httpx.Response(200, json={"object": "page", "id": path.rsplit("/", 1)[-1]})
        if host == "api.apify.com":
            if method == "POST" and path.endswith("/runs"):
                if self.start_run_status >= 400:
                    return httpx.Response(self.start_run_status, json={"error": {"type": "not-enough-usage-to-run-paid-actor"}})
                data = {"id": self.run_id, "status": "READY"} if self.run_id else {}
                return httpx.Response(201, json={"data": data})
            if method == "GET" and path.startswith("/v2/actor-runs/"):
                status = self.statuses[min(self.polls, len(self.statuses) - 1)]
                self.polls += 1
                return httpx.Response(
                    200,
                    json={"data": {"id": self.run_id, "status": status, "defaultDatasetId": self.dataset_id}},
                )
            if method == "GET" and path.startswith("/v2/datasets/"):
                return httpx.Response(200, json=self.items)
        if host == "openrouter.ai":
            content = [{"type": "output_text", "text": self.summary}] if self.summary else []
            return httpx.Response(200, json={"output": [{"type": "message", "role": "assistant", "content": content}]})
        return httpx.Response(404, json={"error": "unexpected request"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, host: str, path_prefix: str = "") -> List[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and r.url.host == host and r.url.path.startswith(path_prefix)
        ]

    def json_of(self, request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_apis() -> FakeApis:
    return FakeApis()


@pytest.fixture
def ctx(settings: Settings, fake_apis: FakeApis) -> AppContext:
    return build_context(settings, transport=fake_apis.transport)


def qa(question: str, answer: str) -> Dict[str, str]:
    return {"question": question, "answer": answer}


FULL_ANSWERS = [
    qa("Für welche Position interessierst du dich?", "Backend Engineer"),
    qa("Wie lang ist deine Kündigungsfrist?", "3 Monate"),
    qa("In welcher Region suchst du?", "München"),
    qa("Wie hoch ist deine Gehaltsvorstellung?", "85.000 €"),
    qa("Welches Beschäftigungsverhältnis?", "Festanstellung, Freelance"),
    qa("Welche Arbeitszeit wünschst du dir?", "Vollzeit bitte"),
    qa("Home-Office?", "Ich arbeite gerne hybrid"),
    qa("Welche Vertragsform?", "Unbefristet"),
    qa("Dein LinkedIn-Profil", "https://www.linkedin.com/in/max-mustermann"),
]
