#!/usr/bin/env python3
"""Configuration management for the Etherscan adapter.

This module provides type-safe configuration dataclasses with validation.
Configuration is loaded from environment variables with sensible defaults
where appropriate.
"""

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .networks import NETWORKS

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_API_URL: str = "https://api.etherscan.io/v2/api"


@dataclass(frozen=True, slots=True)
class ExplorerConfig:
    """Configuration for the Etherscan HTTP API.

    Attributes:
        api_key: Etherscan API key
        api_url: Base URL of the Etherscan API
        request_timeout: HTTP request timeout in seconds
    """

    api_key: str
    api_url: str = DEFAULT_API_URL
    request_timeout: int = 30

    def __post_init__(self) -> None:
        """Validate explorer configuration."""
        if not self.api_key:
            raise ValueError("Etherscan API key is required (ETHERSCAN_API_KEY)")

        parsed = urlparse(self.api_url)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(
                f"Invalid API URL scheme: {parsed.scheme}. "
                "Expected http or https"
            )

        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.request_timeout > 120:
            raise ValueError(f"Request timeout too long (max 120s), got {self.request_timeout}")


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Main configuration for the adapter.

    Attributes:
        network: Network name, one of the entries in the network table
        explorer: Configuration for the Etherscan API
        max_concurrent_requests: Batch size used for multi-item lookups
    """

    network: str
    explorer: ExplorerConfig
    max_concurrent_requests: int = 3

    def __post_init__(self) -> None:
        """Validate adapter configuration."""
        if self.network not in NETWORKS:
            raise ValueError(
                f"Unsupported network: {self.network}. "
                f"Supported networks: {', '.join(sorted(NETWORKS))}"
            )

        if self.max_concurrent_requests < 1:
            raise ValueError(
                f"Max concurrent requests must be positive, got {self.max_concurrent_requests}"
            )
        if self.max_concurrent_requests > 20:
            raise ValueError(
                f"Max concurrent requests too high (max 20), got {self.max_concurrent_requests}"
            )

    @classmethod
    def from_env(cls, network: str | None = None) -> "AdapterConfig":
        """Load configuration from environment variables.

        Args:
            network: Network name overriding the NETWORK variable

        Returns:
            AdapterConfig instance with loaded values

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        api_key = os.environ.get("ETHERSCAN_API_KEY", "")
        if not api_key:
            raise ValueError(
                "ETHERSCAN_API_KEY environment variable is required. "
                "Create one at https://etherscan.io/myapikey"
            )

        explorer_config = ExplorerConfig(
            api_key=api_key,
            api_url=os.environ.get("ETHERSCAN_API_URL", DEFAULT_API_URL),
            request_timeout=int(os.environ.get("REQUEST_TIMEOUT", "30"))
        )

        return cls(
            network=network or os.environ.get("NETWORK", "mainnet"),
            explorer=explorer_config,
            max_concurrent_requests=int(os.environ.get("MAX_CONCURRENT_REQUESTS", "3"))
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("Etherscan Adapter Configuration")
        logger.info("=" * 60)

        logger.info(f"Network: {self.network}")

        logger.info("Explorer:")
        logger.info(f"  API URL: {self.explorer.api_url}")
        logger.info(f"  API Key: {'[CONFIGURED]' if self.explorer.api_key else '[NOT SET]'}")
        logger.info(f"  Request Timeout: {self.explorer.request_timeout} seconds")

        logger.info("Batching:")
        logger.info(f"  Max Concurrent Requests: {self.max_concurrent_requests}")

        logger.info("=" * 60)
