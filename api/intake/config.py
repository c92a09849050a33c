from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    base_path = Path(__file__).resolve()
    candidates = [
        base_path.parents[1] / ".env",  # api/.env
        base_path.parents[2] / ".env",  # repo root .env
    ]
    for path in candidates:
        if path.exists():
            load_dotenv(dotenv_path=path, override=False)
    # As a fallback, load default .env in current working dir
    load_dotenv(override=False)


_load_env()


@dataclass
class Settings:
    # Base
    app_name: str = "candidate-intake-api"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    webhook_path: str = os.getenv("WEBHOOK_PATH", "/api/calendly-webhook")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))

    # CORS/frontends
    # Use default_factory to avoid mutable default list errors on Python 3.12+
    cors_origins: list[str] = field(
        default_factory=lambda: os.getenv("CORS_ORIGINS", "*").split(",")
    )

    # Record store (Notion)
    notion_api_key: str | None = os.getenv("NOTION_API_KEY")
    notion_database_id: str = os.getenv("NOTION_DATABASE_ID", "42c178b0-55fd-42b1-b126-d9ad02dc3fba")
    notion_version: str = os.getenv("NOTION_VERSION", "2022-06-28")
    notion_base: str = os.getenv("NOTION_BASE", "https://api.notion.com/v1")

    # Job runner (Apify)
    apify_token: str | None = os.getenv("APIFY_TOKEN")
    apify_base: str = os.getenv("APIFY_BASE", "https://api.apify.com/v2")
    # Two actors have been used in production; which one is right is a deployment choice
    apify_actor_id: str = os.getenv("APIFY_ACTOR_ID", "dev_fusion~linkedin-profile-scraper")
    apify_input_key: str = os.getenv("APIFY_INPUT_KEY", "profileUrls")
    poll_interval_seconds: float = float(os.getenv("POLL_INTERVAL_SECONDS", "3"))
    poll_max_attempts: int = int(os.getenv("POLL_MAX_ATTEMPTS", "30"))

    # Summarization (OpenRouter)
    openrouter_api_key: str | None = os.getenv("OPENROUTER_API_KEY")
    openrouter_model: str = os.getenv("OPENROUTER_MODEL", "anthropic/claude-sonnet-4")
    summary_max_tokens: int = int(os.getenv("SUMMARY_MAX_TOKENS", "1024"))

    # Answer lookup: "keyword" (question text match) or "positional" (fixed order)
    answer_lookup: str = os.getenv("ANSWER_LOOKUP", "keyword")


def get_settings() -> Settings:
    return Settings()
