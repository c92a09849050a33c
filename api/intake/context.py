from __future__ import annotations

from dataclasses import dataclass

import httpx

from .config import Settings
from .connectors.apify import ApifyClient
from .connectors.notion import NotionClient
from .connectors.openrouter import OpenRouterClient


@dataclass
class AppContext:
    """Process-wide configuration and outbound clients, built once at startup."""

    settings: Settings
    notion: NotionClient
    apify: ApifyClient
    summarizer: OpenRouterClient


def build_context(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> AppContext:
    return AppContext(
        settings=settings,
        notion=NotionClient(settings, transport=transport),
        apify=ApifyClient(settings, transport=transport),
        summarizer=OpenRouterClient(settings, transport=transport),
    )
