"""
Environmental Report Export

Serializes a SearchResult into a report document:

    {
        "property": {...},
        "environmental": {...},
        "generated_at": "2024-06-01T12:00:00+00:00"
    }

Field names match the record models exactly, so an exported report can be
loaded back into a SearchResult. Loading recomputes the risk assessment and
refuses documents whose stored assessment disagrees.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from core.exceptions import RiskAssessmentMismatch
from core.models import SearchResult

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

FILENAME_PREFIX = "miljorapport"
UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


# =============================================================================
# Exceptions
# =============================================================================


class ReportFormatError(ValueError):
    """Raised when a report document cannot be parsed."""

    pass


# =============================================================================
# Export
# =============================================================================


def build_report(
    result: SearchResult,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Build the report document for a search result.

    Args:
        result: Search result to export
        generated_at: Generation timestamp (default: now, UTC)

    Returns:
        Report dictionary ready for JSON serialization
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    document = result.to_dict()
    document["generated_at"] = generated_at.isoformat()
    return document


def export_report_json(
    result: SearchResult,
    generated_at: Optional[datetime] = None,
) -> str:
    """Serialize a search result report as indented JSON."""
    return json.dumps(build_report(result, generated_at), indent=2, ensure_ascii=False)


def report_filename(fastighetsbeteckning: str) -> str:
    """
    File name for an exported report.

    Every character outside [A-Za-z0-9] becomes "-", e.g.
    "Stockholm 1:1" -> "miljorapport-Stockholm-1-1.json".
    """
    return f"{FILENAME_PREFIX}-{UNSAFE_FILENAME_CHARS.sub('-', fastighetsbeteckning)}.json"


def write_report(
    result: SearchResult,
    directory: Union[str, Path],
    generated_at: Optional[datetime] = None,
) -> Path:
    """
    Write a report to a directory.

    Args:
        result: Search result to export
        directory: Target directory (created if missing)
        generated_at: Generation timestamp (default: now, UTC)

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / report_filename(result.property.fastighetsbeteckning)
    path.write_text(export_report_json(result, generated_at), encoding="utf-8")

    logger.info("Wrote report %s", path)
    return path


# =============================================================================
# Import
# =============================================================================


def parse_report(document: dict[str, Any]) -> Tuple[SearchResult, Optional[datetime]]:
    """
    Parse a report dictionary back into a SearchResult.

    Raises:
        RiskAssessmentMismatch: Stored assessment disagrees with the data.
        ReportFormatError: Missing or malformed fields.
    """
    if not isinstance(document, dict):
        raise ReportFormatError("Report must be a JSON object")

    try:
        result = SearchResult.from_dict(document)
    except RiskAssessmentMismatch:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ReportFormatError(f"Malformed report: {e}") from e

    generated_at = None
    if document.get("generated_at"):
        try:
            generated_at = datetime.fromisoformat(document["generated_at"])
        except (TypeError, ValueError) as e:
            raise ReportFormatError(f"Invalid generated_at: {document['generated_at']}") from e

    return result, generated_at


def load_report(text: str) -> Tuple[SearchResult, Optional[datetime]]:
    """Parse an exported JSON report. See parse_report."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReportFormatError(f"Report is not valid JSON: {e}") from e
    return parse_report(document)
