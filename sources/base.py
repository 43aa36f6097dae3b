"""
Base environmental data source interface.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from core.models import EnvironmentalFindings, PropertyRecord


class BaseEnvironmentalSource(ABC):
    """Abstract base class for property and environmental data sources."""

    @abstractmethod
    async def fetch(self, identifier: str) -> Tuple[PropertyRecord, EnvironmentalFindings]:
        """
        Look up a validated property designation.

        Args:
            identifier: A fastighetsbeteckning that passed validation.

        Returns:
            The property record and its environmental findings.

        Raises:
            NotFound: The identifier has no registry match.
            UpstreamUnavailable: A registry could not be reached or read.
        """
        pass
