from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from ..config import Settings


logger = logging.getLogger(__name__)


class NotionUnavailable(RuntimeError):
    pass


class NotionClient:
    """Minimal Notion pages API: create a database row, patch its properties."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.notion_api_key
        self.version = settings.notion_version
        self.base = settings.notion_base.rstrip("/")
        self.timeout = settings.http_timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise NotionUnavailable("Notion client not configured; set NOTION_API_KEY.")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def create_page(self, database_id: str, properties: Dict[str, Any]) -> str:
        payload = {"parent": {"database_id": database_id}, "properties": properties}
        headers = self._headers()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.post(f"{self.base}/pages", headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()
        page_id = data.get("id")
        if not page_id:
            raise RuntimeError("Notion returned no page id")
        logger.info("Created Notion page %s", page_id)
        return page_id

    async def update_page(self, page_id: str, properties: Dict[str, Any]) -> None:
        headers = self._headers()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.patch(f"{self.base}/pages/{page_id}", headers=headers, json={"properties": properties})
            r.raise_for_status()
        logger.info("Updated Notion page %s (%d properties)", page_id, len(properties))
