"""
Etherscan adapter package.

Uniform asynchronous access to Ethereum block height, transactions, address
history and balances, backed by the Etherscan block-explorer API.
"""

from .adapter import EthereumAdapter, create_adapter
from .batch import BoundedBatchExecutor
from .blockchain import BlockchainFacade
from .config import AdapterConfig, ExplorerConfig
from .errors import (
    AdapterError,
    InitializationError,
    InvalidArgument,
    RemoteAPIError,
    TransportError,
    UnsupportedNetwork,
)
from .models import BlockInfo, TransactionRecord
from .networks import NetworkDescriptor, get_network

__all__ = [
    "create_adapter",
    "EthereumAdapter",
    "BlockchainFacade",
    "BoundedBatchExecutor",
    "AdapterConfig",
    "ExplorerConfig",
    "NetworkDescriptor",
    "get_network",
    "BlockInfo",
    "TransactionRecord",
    "AdapterError",
    "InvalidArgument",
    "InitializationError",
    "RemoteAPIError",
    "TransportError",
    "UnsupportedNetwork",
]
__version__ = "0.1.0"
