"""
Utility modules for the environmental risk portal.
"""

from .formatting import format_area, format_distance, format_risk_level
from .config import Config

__all__ = ["format_area", "format_distance", "format_risk_level", "Config"]
