"""
Environmental data sources.

Available sources:
- MockEnvironmentalSource: Development/testing with generated data
- RegistryApiSource: HTTP registry gateway
"""

from utils.config import Config

from .base import BaseEnvironmentalSource
from .mock import MockEnvironmentalSource
from .registry_api import RegistryApiSource


def create_source(config: Config) -> BaseEnvironmentalSource:
    """
    Build the data source selected by configuration.

    Raises:
        ValueError: Unknown source type, or registry source without a URL.
    """
    source_type = config.source_type.lower().strip()

    if source_type == "mock":
        return MockEnvironmentalSource(
            seed=config.mock_seed,
            latency_seconds=config.mock_latency_seconds,
        )
    if source_type == "registry":
        return RegistryApiSource(
            base_url=config.registry_base_url,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
        )

    raise ValueError(f"Unknown SOURCE_TYPE: {config.source_type}")


__all__ = [
    "BaseEnvironmentalSource",
    "MockEnvironmentalSource",
    "RegistryApiSource",
    "create_source",
]
