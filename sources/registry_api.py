"""
Registry API environmental data source.

Fetches property and environmental data from an HTTP registry gateway
that returns the same record shape the pipeline exports. Any risk
assessment in the payload is ignored; the pipeline recomputes it.

Retries on transient failures are internal to this source.
"""

import asyncio
import logging
import time
from typing import Optional, Tuple
from urllib.parse import quote

import requests

from core.exceptions import NotFound, UpstreamUnavailable
from core.models import EnvironmentalFindings, PropertyRecord

from .base import BaseEnvironmentalSource

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

USER_AGENT = "MiljodataPortal/1.0"
REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 3
RETRY_BACKOFF_SECONDS = 0.5

RETRYABLE_STATUS_CODES = frozenset({502, 503, 504})


# =============================================================================
# Source
# =============================================================================

class RegistryApiSource(BaseEnvironmentalSource):
    """
    HTTP-backed source for property and environmental registry data.

    Endpoint: GET {base_url}/properties/{fastighetsbeteckning}
    - 200: {"property": {...}, "environmental": {...}}
    - 404: no match for the designation
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_seconds: float = RETRY_BACKOFF_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required for the registry source")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max(0, max_retries)
        self._backoff_seconds = backoff_seconds
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        })

    def property_url(self, identifier: str) -> str:
        """Build the lookup URL for a designation."""
        return f"{self._base_url}/properties/{quote(identifier, safe='')}"

    async def fetch(self, identifier: str) -> Tuple[PropertyRecord, EnvironmentalFindings]:
        """
        Fetch registry data for a validated designation.

        The blocking HTTP call runs in a worker thread so the caller can
        cancel the search while it is in flight.
        """
        return await asyncio.to_thread(self.fetch_sync, identifier)

    def fetch_sync(self, identifier: str) -> Tuple[PropertyRecord, EnvironmentalFindings]:
        """
        Fetch registry data, blocking.

        Raises:
            NotFound: Registry returned 404.
            UpstreamUnavailable: Network failure, server error after retries,
                or a payload that does not match the record shape.
        """
        payload = self._get_json(identifier)
        return self._parse_payload(identifier, payload)

    def _get_json(self, identifier: str) -> dict:
        url = self.property_url(identifier)
        attempts = self._max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                response = self._session.get(url, timeout=self._timeout)
            except requests.RequestException as e:
                logger.warning(
                    "Registry request failed for %s (attempt %d/%d): %s",
                    identifier, attempt, attempts, e,
                )
                if attempt == attempts:
                    raise UpstreamUnavailable(
                        f"Registry unreachable: {e}", identifier=identifier
                    ) from e
                self._backoff(attempt)
                continue

            if response.status_code == 404:
                raise NotFound(identifier)

            if response.status_code in RETRYABLE_STATUS_CODES and attempt < attempts:
                logger.warning(
                    "Registry returned %d for %s (attempt %d/%d)",
                    response.status_code, identifier, attempt, attempts,
                )
                self._backoff(attempt)
                continue

            try:
                response.raise_for_status()
                return response.json()
            except requests.HTTPError as e:
                raise UpstreamUnavailable(
                    f"Registry error {response.status_code}", identifier=identifier
                ) from e
            except ValueError as e:
                raise UpstreamUnavailable(
                    "Registry returned invalid JSON", identifier=identifier
                ) from e

        # Unreachable: the final attempt either returns or raises
        raise UpstreamUnavailable("Registry retries exhausted", identifier=identifier)

    def _parse_payload(
        self, identifier: str, payload: dict
    ) -> Tuple[PropertyRecord, EnvironmentalFindings]:
        try:
            property_record = PropertyRecord.from_dict(payload["property"])
            findings = EnvironmentalFindings.from_dict(payload["environmental"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed registry payload for %s: %s", identifier, e)
            raise UpstreamUnavailable(
                "Registry returned a malformed record", identifier=identifier
            ) from e

        return property_record, findings

    def _backoff(self, attempt: int) -> None:
        if self._backoff_seconds > 0:
            time.sleep(self._backoff_seconds * attempt)

    def close(self) -> None:
        """Close the session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
