"""
Tests for record models.

Tests cover:
- RiskLevel ordering
- Construction invariants
- Derived risk assessment on EnvironmentalRecord
- Dictionary round-trips and the consistency check on load
"""

import math
import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.exceptions import RiskAssessmentMismatch
from core.models import (
    BUSINESS_RISK_LEVELS,
    ContaminatedSite,
    Coordinate,
    EnvironmentalFindings,
    EnvironmentalRecord,
    PropertyRecord,
    RegulatedBusiness,
    RiskLevel,
    SearchResult,
    SiteStatus,
    SoilPollutionSignal,
)
from core.scoring import assess


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def origin():
    return Coordinate(lat=59.3293, lng=18.0686)


@pytest.fixture
def soil():
    return SoilPollutionSignal(
        level=RiskLevel.HIGH,
        contaminants=("lead", "mercury"),
        last_updated=date(2024, 1, 15),
        source="Naturvårdsverket, Länsstyrelsen",
    )


@pytest.fixture
def business(origin):
    return RegulatedBusiness(
        id="ebh-0",
        name="Petrol station 1",
        type="petrol station",
        distance=250,
        risk_level=RiskLevel.MEDIUM,
        activities=("chemical handling",),
        coordinates=origin,
    )


@pytest.fixture
def site(origin):
    return ContaminatedSite(
        id="site-0",
        name="Contaminated area 1",
        status=SiteStatus.UNDER_INVESTIGATION,
        contaminants=("lead",),
        distance=400,
        severity=RiskLevel.CRITICAL,
        coordinates=origin,
    )


@pytest.fixture
def property_record(origin):
    return PropertyRecord(
        fastighetsbeteckning="Stockholm 1:1",
        coordinates=origin,
        area=5400,
        municipality="Stockholm",
        county="Stockholms län",
        land_use="residential and ancillary buildings",
    )


@pytest.fixture
def environmental(soil, business, site):
    return EnvironmentalRecord(
        soil_pollution=soil,
        nearby_businesses=(business,),
        contaminated_sites=(site,),
    )


# =============================================================================
# RiskLevel
# =============================================================================


class TestRiskLevel:
    """Tests for the ordered risk enumeration."""

    def test_ordering(self):
        assert RiskLevel.LOW < RiskLevel.MEDIUM < RiskLevel.HIGH < RiskLevel.CRITICAL
        assert max(RiskLevel) == RiskLevel.CRITICAL
        assert sorted([RiskLevel.HIGH, RiskLevel.LOW]) == [RiskLevel.LOW, RiskLevel.HIGH]

    def test_weights(self):
        assert [level.weight for level in RiskLevel] == [1, 2, 3, 4]

    def test_business_levels_exclude_critical(self):
        assert RiskLevel.CRITICAL not in BUSINESS_RISK_LEVELS
        assert len(BUSINESS_RISK_LEVELS) == 3


# =============================================================================
# Invariants
# =============================================================================


class TestInvariants:
    """Tests for construction-time checks."""

    @pytest.mark.parametrize("lat, lng", [(math.nan, 18.0), (59.0, math.inf), (-math.inf, 0.0)])
    def test_coordinate_must_be_finite(self, lat, lng):
        with pytest.raises(ValueError):
            Coordinate(lat=lat, lng=lng)

    def test_coordinate_has_no_bounds(self):
        assert Coordinate(lat=123.0, lng=-400.0).lat == 123.0

    @pytest.mark.parametrize("area", [0, -10, math.nan, math.inf])
    def test_area_must_be_positive(self, origin, area):
        with pytest.raises(ValueError):
            PropertyRecord(
                fastighetsbeteckning="Stockholm 1:1",
                coordinates=origin,
                area=area,
                municipality="Stockholm",
                county="Stockholms län",
                land_use="residential",
            )

    def test_business_cannot_be_critical(self, origin):
        with pytest.raises(ValueError):
            RegulatedBusiness(
                id="ebh-0",
                name="Industrial plant 1",
                type="industrial plant",
                distance=100,
                risk_level=RiskLevel.CRITICAL,
                activities=(),
                coordinates=origin,
            )

    def test_business_distance_non_negative(self, origin):
        with pytest.raises(ValueError):
            RegulatedBusiness(
                id="ebh-0",
                name="Dry cleaner 1",
                type="dry cleaner",
                distance=-1,
                risk_level=RiskLevel.LOW,
                activities=(),
                coordinates=origin,
            )

    def test_site_distance_non_negative(self, origin):
        with pytest.raises(ValueError):
            ContaminatedSite(
                id="site-0",
                name="Contaminated area 1",
                status=SiteStatus.ACTIVE,
                contaminants=(),
                distance=-0.5,
                severity=RiskLevel.LOW,
                coordinates=origin,
            )

    @pytest.mark.parametrize("distance", [math.nan, math.inf])
    def test_business_distance_finite(self, origin, distance):
        with pytest.raises(ValueError):
            RegulatedBusiness(
                id="ebh-0",
                name="Dry cleaner 1",
                type="dry cleaner",
                distance=distance,
                risk_level=RiskLevel.LOW,
                activities=(),
                coordinates=origin,
            )

    @pytest.mark.parametrize("distance", [math.nan, -math.inf])
    def test_site_distance_finite(self, origin, distance):
        with pytest.raises(ValueError):
            ContaminatedSite(
                id="site-0",
                name="Contaminated area 1",
                status=SiteStatus.ACTIVE,
                contaminants=(),
                distance=distance,
                severity=RiskLevel.LOW,
                coordinates=origin,
            )

    def test_duplicate_business_ids_rejected(self, soil, business):
        with pytest.raises(ValueError, match="Duplicate business id"):
            EnvironmentalFindings(soil_pollution=soil, nearby_businesses=(business, business))
        with pytest.raises(ValueError, match="Duplicate business id"):
            EnvironmentalRecord(soil_pollution=soil, nearby_businesses=[business, business])

    def test_duplicate_site_ids_rejected(self, soil, site):
        with pytest.raises(ValueError, match="Duplicate site id"):
            EnvironmentalFindings(soil_pollution=soil, contaminated_sites=(site, site))
        with pytest.raises(ValueError, match="Duplicate site id"):
            EnvironmentalRecord(soil_pollution=soil, contaminated_sites=[site, site])

    def test_business_and_site_may_share_an_id(self, soil, business, origin):
        site = ContaminatedSite(
            id=business.id,
            name="Contaminated area 1",
            status=SiteStatus.REMEDIATED,
            contaminants=(),
            distance=300,
            severity=RiskLevel.LOW,
            coordinates=origin,
        )

        record = EnvironmentalRecord(
            soil_pollution=soil, nearby_businesses=(business,), contaminated_sites=(site,)
        )

        assert record.risk_assessment == assess(soil, 1, 1)

    def test_soil_contaminants_deduplicated_in_order(self):
        soil = SoilPollutionSignal(
            level=RiskLevel.LOW,
            contaminants=("zinc", "lead", "zinc", "copper", "lead"),
            last_updated=date(2024, 1, 15),
            source="test registry",
        )

        assert soil.contaminants == ("zinc", "lead", "copper")

    def test_records_are_immutable(self, property_record):
        with pytest.raises(FrozenInstanceError):
            property_record.area = 1


# =============================================================================
# Derived Assessment
# =============================================================================


class TestEnvironmentalRecord:
    """Tests for the derived risk assessment."""

    def test_assessment_derived_from_signals(self, environmental, soil):
        assert environmental.risk_assessment == assess(soil, 1, 1)
        # 3 + 0.5 + 1 = 4.5
        assert environmental.risk_assessment.overall == RiskLevel.HIGH

    def test_assessment_cannot_be_supplied(self, soil):
        with pytest.raises(TypeError):
            EnvironmentalRecord(soil_pollution=soil, risk_assessment=None)

    def test_lists_are_stored_as_tuples(self, soil, business):
        record = EnvironmentalRecord(soil_pollution=soil, nearby_businesses=[business])

        assert record.nearby_businesses == (business,)
        assert record.contaminated_sites == ()

    def test_from_findings(self, soil, business, site, environmental):
        findings = EnvironmentalFindings(
            soil_pollution=soil,
            nearby_businesses=(business,),
            contaminated_sites=(site,),
        )

        assert EnvironmentalRecord.from_findings(findings) == environmental


# =============================================================================
# Serialization
# =============================================================================


class TestSerialization:
    """Tests for to_dict / from_dict."""

    def test_field_names(self, property_record, environmental):
        data = SearchResult(property=property_record, environmental=environmental).to_dict()

        assert set(data) == {"property", "environmental"}
        assert set(data["property"]) == {
            "fastighetsbeteckning", "coordinates", "area", "municipality", "county", "land_use",
        }
        assert set(data["environmental"]) == {
            "soil_pollution", "nearby_businesses", "contaminated_sites", "risk_assessment",
        }
        assert data["environmental"]["soil_pollution"]["last_updated"] == "2024-01-15"
        assert data["environmental"]["nearby_businesses"][0]["risk_level"] == "medium"
        assert data["environmental"]["contaminated_sites"][0]["status"] == "under_investigation"
        assert data["environmental"]["risk_assessment"] == {
            "overall": "high",
            "factors": [
                "soil pollution elevated (high)",
                "1 regulated business(es) nearby",
                "1 known contaminated site(s) nearby",
            ],
        }

    def test_owner_serialized_when_present(self, origin):
        record = PropertyRecord(
            fastighetsbeteckning="Lund 2:3",
            coordinates=origin,
            area=1200,
            municipality="Lund",
            county="Skåne län",
            land_use="residential",
            owner="Lunds kommun",
        )

        assert PropertyRecord.from_dict(record.to_dict()) == record

    def test_search_result_round_trip(self, property_record, environmental):
        result = SearchResult(property=property_record, environmental=environmental)

        assert SearchResult.from_dict(result.to_dict()) == result

    def test_tampered_overall_rejected(self, environmental):
        data = environmental.to_dict()
        data["risk_assessment"]["overall"] = "low"

        with pytest.raises(RiskAssessmentMismatch):
            EnvironmentalRecord.from_dict(data)

    def test_tampered_factors_rejected(self, environmental):
        data = environmental.to_dict()
        data["risk_assessment"]["factors"] = ["no known environmental risks identified"]

        with pytest.raises(RiskAssessmentMismatch):
            EnvironmentalRecord.from_dict(data)

    def test_missing_assessment_recomputed(self, environmental):
        data = environmental.to_dict()
        del data["risk_assessment"]

        assert EnvironmentalRecord.from_dict(data) == environmental

    def test_non_finite_area_rejected_on_load(self, property_record):
        data = property_record.to_dict()
        data["area"] = float("nan")

        with pytest.raises(ValueError):
            PropertyRecord.from_dict(data)

    def test_duplicate_business_rejected_on_load(self, environmental):
        data = environmental.to_dict()
        data["nearby_businesses"].append(dict(data["nearby_businesses"][0]))
        data.pop("risk_assessment")

        with pytest.raises(ValueError, match="Duplicate business id"):
            EnvironmentalRecord.from_dict(data)
