from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .connectors.apify import ApifyClient, FAILED_STATUSES, RunInfo, RunStatus
from .context import AppContext
from .errors import EnrichmentError, JobFailedError, JobTimeoutError, NoDataError, SubmissionError
from .mapping import CandidateApplication, rich_text
from .profile import Experience, LinkedInProfile, normalize_profile
from .prompts import BRIEFING_SYSTEM, build_briefing_prompt


logger = logging.getLogger(__name__)

SKIPPED = "skipped"
SUCCESS = "success"

# Notion rejects rich text content longer than this
MAX_FIELD_CHARS = 2000
MAX_EMPLOYERS = 10
NO_EMPLOYERS = "Keine früheren Arbeitgeber gefunden"
NO_BRIEFING = "Kein Briefing verfügbar"

BRIEFING_PROP = "Briefing"
EMPLOYERS_PROP = "Frühere Arbeitgeber"
HEADLINE_PROP = "LinkedIn Headline"
SUMMARY_PROP = "LinkedIn Zusammenfassung"

Sleep = Callable[[float], Awaitable[Any]]


async def wait_for_run(
    client: ApifyClient,
    run_id: str,
    *,
    interval: float,
    max_attempts: int,
    sleep: Sleep = asyncio.sleep,
) -> RunInfo:
    """Poll a submitted run until it reaches a terminal status.

    Waits ``interval`` seconds before each poll. Returns the run on
    SUCCEEDED, raises JobFailedError on FAILED/ABORTED/TIMED-OUT and
    JobTimeoutError once ``max_attempts`` polls saw no terminal status.
    """
    for attempt in range(1, max_attempts + 1):
        await sleep(interval)
        run = await client.get_run(run_id)
        logger.debug("Apify run %s poll %d/%d: %s", run_id, attempt, max_attempts, run.status)
        if run.status == RunStatus.SUCCEEDED:
            return run
        if run.status in FAILED_STATUSES:
            raise JobFailedError(run_id, run.status)
    raise JobTimeoutError(run_id, max_attempts, interval)


async def scrape_profile(ctx: AppContext, profile_url: str, *, sleep: Sleep = asyncio.sleep) -> LinkedInProfile:
    settings = ctx.settings
    run_input = {settings.apify_input_key: [profile_url]}
    run_id = await ctx.apify.start_run(settings.apify_actor_id, run_input)
    if not run_id:
        raise SubmissionError(f"no run id returned for actor {settings.apify_actor_id}")

    run = await wait_for_run(
        ctx.apify,
        run_id,
        interval=settings.poll_interval_seconds,
        max_attempts=settings.poll_max_attempts,
        sleep=sleep,
    )
    if not run.dataset_id:
        raise NoDataError(f"scrape run {run_id} has no dataset")
    items = await ctx.apify.list_items(run.dataset_id, limit=1)
    if not items:
        raise NoDataError(f"scrape run {run_id} returned no profile data")
    return normalize_profile(items[0])


def format_employers(experiences: list[Experience]) -> str:
    lines = []
    for exp in experiences[:MAX_EMPLOYERS]:
        line = f"• {exp.company or 'Unbekannt'}"
        if exp.title:
            line += f" - {exp.title}"
        if exp.duration:
            line += f" ({exp.duration})"
        lines.append(line)
    return "\n".join(lines) if lines else NO_EMPLOYERS


async def generate_briefing(ctx: AppContext, application: CandidateApplication, profile: LinkedInProfile) -> str:
    prompt = build_briefing_prompt(application, profile)
    text = await ctx.summarizer.complete(
        prompt,
        system=BRIEFING_SYSTEM,
        max_tokens=ctx.settings.summary_max_tokens,
    )
    return text.strip() or NO_BRIEFING


def truncate(text: str, limit: int = MAX_FIELD_CHARS) -> str:
    return text[:limit]


def build_enrichment_properties(briefing: str, profile: LinkedInProfile) -> dict[str, Any]:
    return {
        BRIEFING_PROP: rich_text(truncate(briefing)),
        EMPLOYERS_PROP: rich_text(truncate(format_employers(profile.experiences))),
        HEADLINE_PROP: rich_text(truncate(profile.headline)),
        SUMMARY_PROP: rich_text(truncate(profile.summary)),
    }


async def enrich_candidate(
    ctx: AppContext,
    page_id: str,
    application: CandidateApplication,
    *,
    sleep: Sleep = asyncio.sleep,
) -> str:
    """Scrape, summarize and write back; returns the enrichment status string.

    Never raises: the record already exists, so any failure is reported as
    ``"failed: <reason>"`` and the record is left untouched.
    """
    if not application.linkedin_url:
        return SKIPPED
    try:
        profile = await scrape_profile(ctx, application.linkedin_url, sleep=sleep)
        briefing = await generate_briefing(ctx, application, profile)
        await ctx.notion.update_page(page_id, build_enrichment_properties(briefing, profile))
    except EnrichmentError as e:
        logger.warning("Enrichment for page %s failed: %s", page_id, e)
        return f"failed: {e}"
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected error while enriching page %s", page_id)
        return f"failed: {e}"
    logger.info("Enriched page %s from %s", page_id, application.linkedin_url)
    return SUCCESS
