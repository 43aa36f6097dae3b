"""
Formatting utilities.
"""

from core.models import RiskLevel


def format_area(square_metres: float) -> str:
    """
    Format an area in square metres with Swedish digit grouping.

    Args:
        square_metres: Area in m².

    Returns:
        Formatted area string, e.g. "5 400 m²".
    """
    return f"{round(square_metres):,} m²".replace(",", " ")


def format_distance(metres: float) -> str:
    """
    Format a distance, switching to kilometres from 1000 m.

    Args:
        metres: Distance in metres.

    Returns:
        Formatted distance string.
    """
    if metres >= 1000:
        return f"{metres / 1000:.1f} km"
    return f"{round(metres)} m"


def format_risk_level(level: RiskLevel) -> str:
    """Upper-case label for a risk level, e.g. "HIGH"."""
    return level.value.upper()
