"""
Miljödataportalen - Core Business Logic

This module provides the environmental risk pipeline:
1. Identifier Validation (fastighetsbeteckning acceptance gate)
2. Data Lookup (injected environmental data source)
3. Risk Assessment (deterministic, derived from soil level and counts)
"""

from .exceptions import (
    SearchError,
    InvalidIdentifier,
    NotFound,
    UpstreamUnavailable,
    RiskAssessmentMismatch,
)
from .models import (
    RiskLevel,
    SiteStatus,
    BUSINESS_RISK_LEVELS,
    Coordinate,
    PropertyRecord,
    SoilPollutionSignal,
    RegulatedBusiness,
    ContaminatedSite,
    RiskAssessment,
    EnvironmentalFindings,
    EnvironmentalRecord,
    SearchResult,
)
from .scoring import RiskAssessor, assess
from .validation import (
    validate_fastighetsbeteckning,
    matches_strict_format,
    format_input,
    extract_municipality,
)

# Search pipeline (imports the data source interface)
from .search import PropertySearchService, search_property

__all__ = [
    # Errors
    "SearchError",
    "InvalidIdentifier",
    "NotFound",
    "UpstreamUnavailable",
    "RiskAssessmentMismatch",
    # Models
    "RiskLevel",
    "SiteStatus",
    "BUSINESS_RISK_LEVELS",
    "Coordinate",
    "PropertyRecord",
    "SoilPollutionSignal",
    "RegulatedBusiness",
    "ContaminatedSite",
    "RiskAssessment",
    "EnvironmentalFindings",
    "EnvironmentalRecord",
    "SearchResult",
    # Scoring
    "RiskAssessor",
    "assess",
    # Validation
    "validate_fastighetsbeteckning",
    "matches_strict_format",
    "format_input",
    "extract_municipality",
    # Search
    "PropertySearchService",
    "search_property",
]
