"""
Data models for the environmental risk pipeline.

Property and environmental records produced for one property search.
All records are immutable once produced; the risk assessment of an
EnvironmentalRecord is always derived from its own signals.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import total_ordering
from typing import Any, Optional

from core.exceptions import RiskAssessmentMismatch


# =============================================================================
# Enums
# =============================================================================


@total_ordering
class RiskLevel(Enum):
    """
    Ordinal risk classification.

    low < medium < high < critical
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> int:
        """Integer weight used by the risk assessor (1-4)."""
        return _RISK_WEIGHTS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.weight < other.weight


_RISK_WEIGHTS = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}

# Regulated businesses are never classified as critical
BUSINESS_RISK_LEVELS: tuple[RiskLevel, ...] = (
    RiskLevel.LOW,
    RiskLevel.MEDIUM,
    RiskLevel.HIGH,
)


class SiteStatus(Enum):
    """Registration status of a contaminated site."""

    ACTIVE = "active"
    REMEDIATED = "remediated"
    UNDER_INVESTIGATION = "under_investigation"


# =============================================================================
# Location
# =============================================================================


@dataclass(frozen=True)
class Coordinate:
    """WGS84 latitude/longitude pair. No geographic bounds are enforced."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise ValueError(f"Coordinate must be finite: ({self.lat}, {self.lng})")

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Coordinate":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


# =============================================================================
# Property
# =============================================================================


@dataclass(frozen=True)
class PropertyRecord:
    """Normalized property record for one fastighetsbeteckning."""

    fastighetsbeteckning: str
    coordinates: Coordinate
    area: float  # square metres
    municipality: str
    county: str
    land_use: str
    owner: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.fastighetsbeteckning:
            raise ValueError("fastighetsbeteckning is required")
        if not (math.isfinite(self.area) and self.area > 0):
            raise ValueError("area must be finite and positive")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "fastighetsbeteckning": self.fastighetsbeteckning,
            "coordinates": self.coordinates.to_dict(),
            "area": self.area,
            "municipality": self.municipality,
            "county": self.county,
            "land_use": self.land_use,
        }
        if self.owner is not None:
            data["owner"] = self.owner
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PropertyRecord":
        """Create from dictionary."""
        return cls(
            fastighetsbeteckning=data["fastighetsbeteckning"],
            coordinates=Coordinate.from_dict(data["coordinates"]),
            area=data["area"],
            municipality=data["municipality"],
            county=data["county"],
            land_use=data["land_use"],
            owner=data.get("owner"),
        )


# =============================================================================
# Environmental Signals
# =============================================================================


@dataclass(frozen=True)
class SoilPollutionSignal:
    """Soil pollution classification for the property itself."""

    level: RiskLevel
    contaminants: tuple[str, ...]
    last_updated: date
    source: str

    def __post_init__(self) -> None:
        # Unique, first occurrence wins
        object.__setattr__(self, "contaminants", tuple(dict.fromkeys(self.contaminants)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "level": self.level.value,
            "contaminants": list(self.contaminants),
            "last_updated": self.last_updated.isoformat(),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SoilPollutionSignal":
        """Create from dictionary."""
        return cls(
            level=RiskLevel(data["level"]),
            contaminants=tuple(data.get("contaminants", [])),
            last_updated=date.fromisoformat(data["last_updated"]),
            source=data["source"],
        )


@dataclass(frozen=True)
class RegulatedBusiness:
    """
    A nearby business from the regulated-activity (EBH) register.

    Risk level is restricted to low/medium/high.
    """

    id: str
    name: str
    type: str
    distance: float  # metres
    risk_level: RiskLevel
    activities: tuple[str, ...]
    coordinates: Coordinate

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance) or self.distance < 0:
            raise ValueError("distance must be finite and non-negative")
        if self.risk_level not in BUSINESS_RISK_LEVELS:
            raise ValueError(f"Invalid business risk level: {self.risk_level.value}")
        object.__setattr__(self, "activities", tuple(dict.fromkeys(self.activities)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "distance": self.distance,
            "risk_level": self.risk_level.value,
            "activities": list(self.activities),
            "coordinates": self.coordinates.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegulatedBusiness":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            distance=data["distance"],
            risk_level=RiskLevel(data["risk_level"]),
            activities=tuple(data.get("activities", [])),
            coordinates=Coordinate.from_dict(data["coordinates"]),
        )


@dataclass(frozen=True)
class ContaminatedSite:
    """A registered contaminated area near the property."""

    id: str
    name: str
    status: SiteStatus
    contaminants: tuple[str, ...]
    distance: float  # metres
    severity: RiskLevel
    coordinates: Coordinate

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance) or self.distance < 0:
            raise ValueError("distance must be finite and non-negative")
        object.__setattr__(self, "contaminants", tuple(dict.fromkeys(self.contaminants)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "contaminants": list(self.contaminants),
            "distance": self.distance,
            "severity": self.severity.value,
            "coordinates": self.coordinates.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContaminatedSite":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            status=SiteStatus(data["status"]),
            contaminants=tuple(data.get("contaminants", [])),
            distance=data["distance"],
            severity=RiskLevel(data["severity"]),
            coordinates=Coordinate.from_dict(data["coordinates"]),
        )


# =============================================================================
# Assessment and Aggregates
# =============================================================================


@dataclass(frozen=True)
class RiskAssessment:
    """Overall risk level plus ordered contributing factors."""

    overall: RiskLevel
    factors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.value,
            "factors": list(self.factors),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskAssessment":
        return cls(
            overall=RiskLevel(data["overall"]),
            factors=tuple(data.get("factors", [])),
        )


def _check_unique_ids(items, kind: str) -> None:
    """Raise ValueError if two items share an id."""
    seen = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate {kind} id: {item.id}")
        seen.add(item.id)


@dataclass(frozen=True)
class EnvironmentalFindings:
    """
    Raw environmental signals for a property, before assessment.

    This is what a data source produces. The pipeline turns it into an
    EnvironmentalRecord, which adds the derived RiskAssessment.
    """

    soil_pollution: SoilPollutionSignal
    nearby_businesses: tuple[RegulatedBusiness, ...] = ()
    contaminated_sites: tuple[ContaminatedSite, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "nearby_businesses", tuple(self.nearby_businesses))
        object.__setattr__(self, "contaminated_sites", tuple(self.contaminated_sites))
        _check_unique_ids(self.nearby_businesses, "business")
        _check_unique_ids(self.contaminated_sites, "site")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvironmentalFindings":
        """Create from dictionary. Any stored risk assessment is ignored."""
        return cls(
            soil_pollution=SoilPollutionSignal.from_dict(data["soil_pollution"]),
            nearby_businesses=tuple(
                RegulatedBusiness.from_dict(b) for b in data.get("nearby_businesses", [])
            ),
            contaminated_sites=tuple(
                ContaminatedSite.from_dict(s) for s in data.get("contaminated_sites", [])
            ),
        )


@dataclass(frozen=True)
class EnvironmentalRecord:
    """
    Environmental record for one property.

    risk_assessment is not an init argument: it is recomputed from the
    soil level and the business/site counts whenever a record is built.
    """

    soil_pollution: SoilPollutionSignal
    nearby_businesses: tuple[RegulatedBusiness, ...] = ()
    contaminated_sites: tuple[ContaminatedSite, ...] = ()
    risk_assessment: RiskAssessment = field(init=False)

    def __post_init__(self) -> None:
        # core.scoring imports this module
        from core.scoring import assess

        object.__setattr__(self, "nearby_businesses", tuple(self.nearby_businesses))
        object.__setattr__(self, "contaminated_sites", tuple(self.contaminated_sites))
        _check_unique_ids(self.nearby_businesses, "business")
        _check_unique_ids(self.contaminated_sites, "site")
        object.__setattr__(
            self,
            "risk_assessment",
            assess(
                self.soil_pollution,
                len(self.nearby_businesses),
                len(self.contaminated_sites),
            ),
        )

    @classmethod
    def from_findings(cls, findings: EnvironmentalFindings) -> "EnvironmentalRecord":
        return cls(
            soil_pollution=findings.soil_pollution,
            nearby_businesses=findings.nearby_businesses,
            contaminated_sites=findings.contaminated_sites,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "soil_pollution": self.soil_pollution.to_dict(),
            "nearby_businesses": [b.to_dict() for b in self.nearby_businesses],
            "contaminated_sites": [s.to_dict() for s in self.contaminated_sites],
            "risk_assessment": self.risk_assessment.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvironmentalRecord":
        """
        Create from dictionary.

        The assessment is recomputed. A stored assessment that disagrees
        with the recomputation raises RiskAssessmentMismatch.
        """
        record = cls.from_findings(EnvironmentalFindings.from_dict(data))

        stored = data.get("risk_assessment")
        if stored is not None:
            stored_assessment = RiskAssessment.from_dict(stored)
            if stored_assessment != record.risk_assessment:
                raise RiskAssessmentMismatch(stored_assessment, record.risk_assessment)

        return record


@dataclass(frozen=True)
class SearchResult:
    """Combined output of one property search."""

    property: PropertyRecord
    environmental: EnvironmentalRecord

    def to_dict(self) -> dict[str, Any]:
        return {
            "property": self.property.to_dict(),
            "environmental": self.environmental.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResult":
        return cls(
            property=PropertyRecord.from_dict(data["property"]),
            environmental=EnvironmentalRecord.from_dict(data["environmental"]),
        )
