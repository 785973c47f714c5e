"""
HTTP client for the remote patient assessment API.

Fetching is forgiving: any page that cannot be retrieved or parsed ends the
pagination loop and whatever was collected so far is returned. Submission is
strict and raises :class:`SubmissionError`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import requests

from risk_alerts.config import settings
from risk_alerts.schemas.patient_api import PATIENT_PAGE_SCHEMA, SUBMISSION_SCHEMA
from risk_alerts.services.validation import validate_against_schema

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503})


class PatientApiError(Exception):
    """Base error for the patient API client."""


class SubmissionError(PatientApiError):
    """The assessment could not be submitted."""


@dataclass
class PatientPage:
    records: list[dict[str, Any]] = field(default_factory=list)
    page: int = 1
    has_next: bool = False


class PatientApiClient:
    """
    Thin wrapper over ``requests`` for the patients and submit-assessment
    endpoints.

    Usage:
        client = PatientApiClient()
        patients = client.fetch_all_patients()
        client.submit_assessment(alerts.to_submission())
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        session: requests.Session | None = None,
        page_limit: int | None = None,
        page_delay: float | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_backoff: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = (base_url or settings.PATIENT_API_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.PATIENT_API_KEY
        self.session = session or requests.Session()
        self.page_limit = page_limit or settings.PAGE_LIMIT
        self.page_delay = settings.PAGE_DELAY_SECONDS if page_delay is None else page_delay
        self.timeout = timeout or settings.REQUEST_TIMEOUT_SECONDS
        self.max_retries = max(1, max_retries or settings.MAX_RETRIES)
        self.retry_backoff = (
            settings.RETRY_BACKOFF_SECONDS if retry_backoff is None else retry_backoff
        )
        self._sleep = sleep

    @property
    def headers(self) -> dict[str, str]:
        return {"x-api-key": self.api_key, "Content-Type": "application/json"}

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def _get_with_retry(self, url: str, params: dict[str, Any]) -> requests.Response | None:
        response = None
        for attempt in range(self.max_retries):
            try:
                response = self.session.get(
                    url, headers=self.headers, params=params, timeout=self.timeout
                )
            except requests.RequestException as exc:
                logger.warning("Request to %s failed: %s", url, exc)
                return None

            if response.status_code not in RETRYABLE_STATUS_CODES:
                return response
            if attempt < self.max_retries - 1:
                wait = self.retry_backoff * (attempt + 1)
                logger.info(
                    "Got %s from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code, url, wait, attempt + 1, self.max_retries,
                )
                self._sleep(wait)
        return response

    def get_page(self, page: int = 1, limit: int | None = None) -> PatientPage | None:
        """Fetch one page of patients. Returns ``None`` on any failure."""
        url = f"{self.base_url}/patients"
        response = self._get_with_retry(url, {"page": page, "limit": limit or self.page_limit})
        if response is None:
            return None
        if response.status_code != 200:
            logger.warning(
                "API error on page %d - status %s: %s", page, response.status_code, response.text
            )
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Invalid JSON on page %d: %s", page, exc)
            return None

        errors = validate_against_schema(payload, PATIENT_PAGE_SCHEMA)
        if errors:
            logger.warning("Unexpected page %d shape: %s", page, "; ".join(errors))
            return None

        pagination = payload.get("pagination") or {}
        return PatientPage(
            records=payload["data"],
            page=pagination.get("page", page),
            has_next=bool(pagination.get("hasNext", False)),
        )

    def fetch_all_patients(self, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Walk every page and return all patient records in delivery order.

        Stops at the first page that fails, is empty, or reports no next page.
        """
        patients: list[dict[str, Any]] = []
        page_number = 1
        logger.info("Starting patient data fetch")

        while True:
            page = self.get_page(page_number, limit)
            if page is None or not page.records:
                logger.info("No more data available after page %d", page_number - 1)
                break

            patients = patients + page.records
            logger.info(
                "Page %d: %d patients (total so far: %d, has_next: %s)",
                page_number, len(page.records), len(patients), page.has_next,
            )
            if not page.has_next:
                break

            page_number += 1
            if self.page_delay > 0:
                self._sleep(self.page_delay)

        logger.info("Total patients fetched: %d", len(patients))
        return patients

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit_assessment(self, alerts: dict[str, list[str]]) -> dict[str, Any]:
        """POST the three alert lists and return the decoded response body."""
        errors = validate_against_schema(alerts, SUBMISSION_SCHEMA)
        if errors:
            raise SubmissionError(f"Invalid submission payload: {'; '.join(errors)}")

        url = f"{self.base_url}/submit-assessment"
        try:
            response = self.session.post(
                url, headers=self.headers, json=alerts, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise SubmissionError(f"Request error: {exc}") from exc

        if response.status_code != 200:
            raise SubmissionError(f"Failed to submit assessment: {response.text}")
        try:
            result = response.json()
        except ValueError as exc:
            raise SubmissionError(f"JSON parse error: {exc}") from exc

        logger.info("Assessment submitted to %s", url)
        return result
