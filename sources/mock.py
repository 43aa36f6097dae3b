"""
Mock environmental data source for development and testing.
Generates plausible registry data without external requests.
"""

import asyncio
import logging
import random
from datetime import date
from typing import List, Optional, Tuple

from core.models import (
    BUSINESS_RISK_LEVELS,
    ContaminatedSite,
    Coordinate,
    EnvironmentalFindings,
    PropertyRecord,
    RegulatedBusiness,
    RiskLevel,
    SiteStatus,
    SoilPollutionSignal,
)
from core.validation import extract_municipality

from .base import BaseEnvironmentalSource

logger = logging.getLogger(__name__)


class MockEnvironmentalSource(BaseEnvironmentalSource):
    """
    Mock source that generates placeholder property and environmental data.

    Output contract (shared with real sources):
    - area in [1000, 11000) m²
    - 0-3 soil contaminants, 0-4 businesses, 0-2 contaminated sites
    - business distance in [100, 900) m, never critical risk
    - site distance in [200, 700) m, contaminants drawn from the soil set
    """

    # Municipality -> (county, latitude, longitude)
    MUNICIPALITIES = {
        "Stockholm": ("Stockholms län", 59.3293, 18.0686),
        "Göteborg": ("Västra Götalands län", 57.7089, 11.9746),
        "Malmö": ("Skåne län", 55.6050, 13.0038),
        "Uppsala": ("Uppsala län", 59.8586, 17.6389),
        "Linköping": ("Östergötlands län", 58.4108, 15.6214),
        "Örebro": ("Örebro län", 59.2753, 15.2134),
        "Västerås": ("Västmanlands län", 59.6099, 16.5448),
        "Helsingborg": ("Skåne län", 56.0465, 12.6945),
        "Lund": ("Skåne län", 55.7047, 13.1910),
        "Umeå": ("Västerbottens län", 63.8258, 20.2630),
    }
    DEFAULT_MUNICIPALITY = "Stockholm"

    CONTAMINANTS = [
        "lead",
        "mercury",
        "cadmium",
        "chromium",
        "nickel",
        "zinc",
        "copper",
        "arsenic",
    ]

    BUSINESS_TYPES = [
        "petrol station",
        "dry cleaner",
        "printing works",
        "vehicle workshop",
        "industrial plant",
        "waste management",
    ]

    ACTIVITIES = ["chemical handling", "waste handling"]

    LAND_USE = "residential and ancillary buildings"
    SOIL_SOURCE = "Naturvårdsverket, Länsstyrelsen"
    SOIL_LAST_UPDATED = date(2024, 1, 15)

    # Coordinate jitter, degrees (full width)
    PROPERTY_SPREAD = 0.1
    BUSINESS_SPREAD = 0.01
    SITE_SPREAD = 0.008

    def __init__(
        self,
        seed: Optional[int] = None,
        latency_seconds: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize mock source.

        Args:
            seed: Optional random seed for reproducible results.
            latency_seconds: Simulated registry round-trip time.
            rng: Random generator to draw from (overrides seed).
        """
        self._rng = rng or random.Random(seed)
        self._latency_seconds = latency_seconds

    async def fetch(self, identifier: str) -> Tuple[PropertyRecord, EnvironmentalFindings]:
        """
        Generate a mock property and environmental findings.

        Args:
            identifier: Validated fastighetsbeteckning.

        Returns:
            Mock PropertyRecord and EnvironmentalFindings.
        """
        if self._latency_seconds > 0:
            await asyncio.sleep(self._latency_seconds)

        property_record = self._generate_property(identifier)
        findings = self._generate_findings(property_record.coordinates)

        logger.debug(
            "Generated mock data for %s: %d businesses, %d sites",
            identifier,
            len(findings.nearby_businesses),
            len(findings.contaminated_sites),
        )
        return property_record, findings

    def _generate_property(self, identifier: str) -> PropertyRecord:
        """Generate a single mock property record."""
        municipality = extract_municipality(identifier)
        county, base_lat, base_lng = self.MUNICIPALITIES.get(
            municipality, self.MUNICIPALITIES[self.DEFAULT_MUNICIPALITY]
        )

        return PropertyRecord(
            fastighetsbeteckning=identifier,
            coordinates=self._jitter(Coordinate(base_lat, base_lng), self.PROPERTY_SPREAD),
            area=self._rng.randrange(1000, 11000),
            municipality=municipality,
            county=county,
            land_use=self.LAND_USE,
        )

    def _generate_findings(self, origin: Coordinate) -> EnvironmentalFindings:
        """Generate soil signal, nearby businesses and contaminated sites."""
        soil = SoilPollutionSignal(
            level=self._rng.choice(list(RiskLevel)),
            contaminants=tuple(self._rng.sample(self.CONTAMINANTS, self._rng.randrange(0, 4))),
            last_updated=self.SOIL_LAST_UPDATED,
            source=self.SOIL_SOURCE,
        )

        businesses = [
            self._generate_business(i, origin)
            for i in range(self._rng.randrange(0, 5))
        ]
        sites = [
            self._generate_site(i, origin, soil.contaminants)
            for i in range(self._rng.randrange(0, 3))
        ]

        return EnvironmentalFindings(
            soil_pollution=soil,
            nearby_businesses=tuple(businesses),
            contaminated_sites=tuple(sites),
        )

    def _generate_business(self, index: int, origin: Coordinate) -> RegulatedBusiness:
        business_type = self._rng.choice(self.BUSINESS_TYPES)
        return RegulatedBusiness(
            id=f"ebh-{index}",
            name=f"{business_type.capitalize()} {index + 1}",
            type=business_type,
            distance=self._rng.randrange(100, 900),
            risk_level=self._rng.choice(BUSINESS_RISK_LEVELS),
            activities=tuple(self.ACTIVITIES[: self._rng.randint(1, 2)]),
            coordinates=self._jitter(origin, self.BUSINESS_SPREAD),
        )

    def _generate_site(
        self,
        index: int,
        origin: Coordinate,
        soil_contaminants: Tuple[str, ...],
    ) -> ContaminatedSite:
        # Site pollutants are always a subset of the soil contaminants
        contaminants: List[str] = list(soil_contaminants[: self._rng.randint(1, 3)])
        return ContaminatedSite(
            id=f"site-{index}",
            name=f"Contaminated area {index + 1}",
            status=self._rng.choice(list(SiteStatus)),
            contaminants=tuple(contaminants),
            distance=self._rng.randrange(200, 700),
            severity=self._rng.choice(list(RiskLevel)),
            coordinates=self._jitter(origin, self.SITE_SPREAD),
        )

    def _jitter(self, origin: Coordinate, spread: float) -> Coordinate:
        return Coordinate(
            lat=origin.lat + (self._rng.random() - 0.5) * spread,
            lng=origin.lng + (self._rng.random() - 0.5) * spread,
        )
