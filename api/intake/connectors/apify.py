from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from ..config import Settings


logger = logging.getLogger(__name__)


class ApifyUnavailable(RuntimeError):
    pass


class RunStatus:
    READY = "READY"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    TIMING_OUT = "TIMING-OUT"
    TIMED_OUT = "TIMED-OUT"
    ABORTING = "ABORTING"
    ABORTED = "ABORTED"


# Terminal states other than SUCCEEDED
FAILED_STATUSES = frozenset({RunStatus.FAILED, RunStatus.ABORTED, RunStatus.TIMED_OUT})


@dataclass
class RunInfo:
    id: str
    status: str
    dataset_id: str | None = None


class ApifyClient:
    """Actor runs API: start a run, read its status, read its dataset."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self.token = settings.apify_token
        self.base = settings.apify_base.rstrip("/")
        self.timeout = settings.http_timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if not self.token:
            raise ApifyUnavailable("Apify client not configured; set APIFY_TOKEN.")
        # Never in the query string: request URLs appear in HTTPStatusError messages
        return {"Authorization": f"Bearer {self.token}", "Accept": "application/json"}

    async def start_run(self, actor_id: str, run_input: dict[str, Any]) -> str | None:
        """Start an actor run and return its id, or None if the API gave none."""
        headers = self._headers()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.post(f"{self.base}/acts/{actor_id}/runs", headers=headers, json=run_input)
            r.raise_for_status()
            data = r.json()
        run = data.get("data") or {}
        run_id = run.get("id")
        logger.info("Started Apify run %s for actor %s", run_id, actor_id)
        return run_id

    async def get_run(self, run_id: str) -> RunInfo:
        headers = self._headers()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(f"{self.base}/actor-runs/{run_id}", headers=headers)
            r.raise_for_status()
            data = r.json()
        run = data.get("data") or {}
        return RunInfo(
            id=str(run.get("id") or run_id),
            status=str(run.get("status") or RunStatus.RUNNING),
            dataset_id=run.get("defaultDatasetId"),
        )

    async def list_items(self, dataset_id: str, limit: int | None = None) -> list[dict[str, Any]]:
        headers = self._headers()
        params: dict[str, Any] = {"clean": "true", "format": "json"}
        if limit is not None:
            params["limit"] = max(1, int(limit))
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.get(f"{self.base}/datasets/{dataset_id}/items", params=params, headers=headers)
            r.raise_for_status()
            data = r.json()
        if not isinstance(data, list):
            logger.warning("Unexpected dataset payload shape: %s", type(data))
            return []
        return data
