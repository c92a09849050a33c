from __future__ import annotations


class InvalidPayloadError(ValueError):
    """Inbound request body could not be read as a webhook event."""


class EnrichmentError(Exception):
    """Base for failures inside the profile enrichment step.

    These never abort the webhook request; the handler reports them as
    ``"failed: <message>"`` next to the already created record.
    """


class SubmissionError(EnrichmentError):
    pass


class JobFailedError(EnrichmentError):
    def __init__(self, run_id: str, status: str):
        super().__init__(f"scrape run {run_id} ended with status {status}")
        self.run_id = run_id
        self.status = status


class JobTimeoutError(EnrichmentError, TimeoutError):
    def __init__(self, run_id: str, attempts: int, interval: float):
        super().__init__(
            f"scrape run {run_id} not finished after {attempts} polls ({attempts * interval:.0f}s)"
        )
        self.run_id = run_id
        self.attempts = attempts


class NoDataError(EnrichmentError):
    pass
