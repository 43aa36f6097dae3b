"""
Environmental risk scoring logic.
"""

from __future__ import annotations

from typing import List, Union

from .models import RiskAssessment, RiskLevel, SoilPollutionSignal


class RiskAssessor:
    """
    Derives an overall risk level and contributing factors.

    Scoring methodology:
    - Soil pollution: level weight (low=1, medium=2, high=3, critical=4)
    - Nearby regulated businesses: 0.5 per business, capped at 2.0
    - Contaminated sites: 1.0 per site, capped at 3.0

    Only the soil level and the two counts are consulted. Distances,
    contaminant identities and names never affect the result.
    """

    # Weights
    WEIGHT_PER_BUSINESS = 0.5
    MAX_BUSINESS_WEIGHT = 2.0
    WEIGHT_PER_SITE = 1.0
    MAX_SITE_WEIGHT = 3.0

    # Upper bounds (inclusive) of each bucket; above HIGH is critical
    THRESHOLD_LOW = 2.0
    THRESHOLD_MEDIUM = 4.0
    THRESHOLD_HIGH = 6.0

    NO_RISK_FACTOR = "no known environmental risks identified"

    def assess(
        self,
        soil: Union[SoilPollutionSignal, RiskLevel],
        business_count: int,
        site_count: int,
    ) -> RiskAssessment:
        """
        Assess overall environmental risk.

        Args:
            soil: Soil pollution signal (or its level).
            business_count: Number of nearby regulated businesses.
            site_count: Number of nearby contaminated sites.

        Returns:
            RiskAssessment with overall level and ordered factors.
        """
        level = soil.level if isinstance(soil, SoilPollutionSignal) else soil
        # Negative counts contribute nothing
        business_count = max(0, business_count)
        site_count = max(0, site_count)

        score = self.calculate_score(level, business_count, site_count)

        return RiskAssessment(
            overall=self._get_overall(score),
            factors=tuple(self._generate_factors(level, business_count, site_count)),
        )

    def calculate_score(self, level: RiskLevel, business_count: int, site_count: int) -> float:
        """Calculate the raw risk score (1.0 - 9.0)."""
        score = float(level.weight)
        score += min(business_count * self.WEIGHT_PER_BUSINESS, self.MAX_BUSINESS_WEIGHT)
        score += min(site_count * self.WEIGHT_PER_SITE, self.MAX_SITE_WEIGHT)
        return score

    def _get_overall(self, score: float) -> RiskLevel:
        """Bucket a score into a risk level."""
        if score <= self.THRESHOLD_LOW:
            return RiskLevel.LOW
        elif score <= self.THRESHOLD_MEDIUM:
            return RiskLevel.MEDIUM
        elif score <= self.THRESHOLD_HIGH:
            return RiskLevel.HIGH
        else:
            return RiskLevel.CRITICAL

    def _generate_factors(
        self,
        level: RiskLevel,
        business_count: int,
        site_count: int,
    ) -> List[str]:
        """Generate human-readable factors: soil, businesses, sites."""
        factors = []

        if level != RiskLevel.LOW:
            factors.append(f"soil pollution elevated ({level.value})")

        if business_count > 0:
            factors.append(f"{business_count} regulated business(es) nearby")

        if site_count > 0:
            factors.append(f"{site_count} known contaminated site(s) nearby")

        if not factors:
            factors.append(self.NO_RISK_FACTOR)

        return factors


_default_assessor = RiskAssessor()


def assess(
    soil: Union[SoilPollutionSignal, RiskLevel],
    business_count: int,
    site_count: int,
) -> RiskAssessment:
    """Assess overall risk with the default RiskAssessor."""
    return _default_assessor.assess(soil, business_count, site_count)
