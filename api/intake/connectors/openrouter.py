from __future__ import annotations

from typing import Any, List, Optional

import logging

import httpx

from ..config import Settings


logger = logging.getLogger(__name__)


class SummarizerUnavailable(RuntimeError):
    pass


class OpenRouterClient:
    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = settings.openrouter_api_key
        self.model = settings.openrouter_model
        self.app_name = settings.app_name
        self._transport = transport

    async def complete(self, prompt: str, *, system: Optional[str] = None, max_tokens: int = 1024, model: Optional[str] = None) -> str:
        """Call OpenRouter Responses API (Beta) and return the assistant text ("" if none)."""
        if not self.api_key:
            raise SummarizerUnavailable("Summarizer not configured; set OPENROUTER_API_KEY.")

        messages: List[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        data = await self._responses_request(messages, model=model, max_tokens=max_tokens)
        return _extract_first_text(data)

    async def _responses_request(self, messages: List[dict[str, Any]], *, model: Optional[str], max_tokens: int) -> dict:
        payload: dict[str, Any] = {
            "model": model or self.model,
            "input": _convert_messages(messages),
            "temperature": 0.2,
            "max_output_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "http://localhost",
            "X-Title": self.app_name,
        }
        url = "https://openrouter.ai/api/v1/responses"
        logger.debug("Requesting summary from %s (max %d tokens)", payload["model"], max_tokens)
        # Summaries can take a while; not bound to the shared HTTP timeout
        async with httpx.AsyncClient(timeout=60, transport=self._transport) as client:
            r = await client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            return r.json()


def _convert_messages(messages: List[dict[str, Any]]) -> List[dict[str, Any]]:
    converted: List[dict[str, Any]] = []
    for msg in messages:
        role = msg.get("role", "user")
        text = str(msg.get("content") or "")
        part_type = "output_text" if role == "assistant" else "input_text"
        converted.append(
            {
                "type": "message",
                "role": role,
                "content": [{"type": part_type, "text": text}],
            }
        )
    return converted


def _extract_first_text(response: dict[str, Any]) -> str:
    outputs = response.get("output") or []
    texts: list[str] = []
    for item in outputs:
        if item.get("type") != "message":
            continue
        for part in item.get("content", []) or []:
            if part.get("type") == "output_text":
                txt = part.get("text")
                if txt:
                    texts.append(txt)
    return "\n\n".join(texts).strip()
