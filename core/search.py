"""
Property Search Pipeline

Validator -> data source -> risk assessor, composed into one search call.
The service holds no per-search state; every call builds a fresh
SearchResult or raises a SearchError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from sources.base import BaseEnvironmentalSource

from .exceptions import InvalidIdentifier, SearchError, UpstreamUnavailable
from .models import EnvironmentalRecord, SearchResult
from .validation import validate_fastighetsbeteckning

logger = logging.getLogger(__name__)


class PropertySearchService:
    """
    Runs environmental risk searches against a data source.

    The data source is injected; the service never generates data itself.
    """

    def __init__(self, source: BaseEnvironmentalSource):
        """
        Initialize the search service.

        Args:
            source: Where property and environmental data come from.
        """
        self._source = source

    @property
    def source(self) -> BaseEnvironmentalSource:
        return self._source

    async def search(self, raw_input: str) -> SearchResult:
        """
        Search for a property and assess its environmental risk.

        Args:
            raw_input: User-entered fastighetsbeteckning.

        Returns:
            SearchResult with property and environmental records.

        Raises:
            InvalidIdentifier: Input rejected before any lookup.
            NotFound: No registry match.
            UpstreamUnavailable: The data source failed.
        """
        if not validate_fastighetsbeteckning(raw_input):
            logger.info("Rejected fastighetsbeteckning %r", raw_input)
            raise InvalidIdentifier(raw_input)

        identifier = raw_input.strip()
        logger.info("Searching %s", identifier)

        try:
            property_record, findings = await self._source.fetch(identifier)
        except SearchError as e:
            logger.warning("Search for %s failed: %s", identifier, e)
            raise
        except Exception as e:
            logger.exception("Unexpected data source failure for %s", identifier)
            raise UpstreamUnavailable(
                f"Data source failed: {e}", identifier=identifier
            ) from e

        environmental = EnvironmentalRecord.from_findings(findings)
        result = SearchResult(property=property_record, environmental=environmental)

        logger.info(
            "Search for %s complete: overall risk %s",
            identifier,
            environmental.risk_assessment.overall.value,
        )
        return result


def search_property(
    raw_input: str,
    source: Optional[BaseEnvironmentalSource] = None,
) -> SearchResult:
    """
    Run one search synchronously.

    Convenience wrapper for scripts and the CLI. Uses the mock source
    when no source is given.
    """
    if source is None:
        from sources.mock import MockEnvironmentalSource

        source = MockEnvironmentalSource()

    return asyncio.run(PropertySearchService(source).search(raw_input))
