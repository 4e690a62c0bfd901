#!/usr/bin/env python3
"""Error taxonomy for the Etherscan adapter.

Every error raised by the adapter derives from AdapterError so callers can
catch the whole family at once. Argument and configuration errors also derive
from ValueError, matching how the configuration layer reports bad input.
"""

from typing import Any


class AdapterError(Exception):
    """Base class for all adapter errors."""


class InvalidArgument(AdapterError, ValueError):
    """Caller input is malformed (e.g. not a sequence where one is required)."""


class UnsupportedNetwork(AdapterError, ValueError):
    """The requested network identifier is not in the network table."""

    def __init__(self, network_name: str) -> None:
        self.network_name = network_name
        super().__init__(f"Unsupported network: {network_name}")


class InitializationError(AdapterError):
    """The initial chain height fetch failed. Safe to retry."""


class RemoteAPIError(AdapterError):
    """The explorer answered with a structured error object.

    Attributes:
        code: Error code reported by the remote service (may be None)
        message: Error message reported by the remote service
    """

    def __init__(self, code: Any, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"Remote API error {code}: {message}")


class TransportError(AdapterError):
    """The call failed with an error that carried no structure of its own."""
