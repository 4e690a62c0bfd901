#!/usr/bin/env python3
"""Adapter construction.

create_adapter() binds a network descriptor to Etherscan credentials. The
blockchain facade is built on first use and reused afterwards.
"""

import logging

from .blockchain import BlockchainFacade
from .config import AdapterConfig, ExplorerConfig
from .networks import NetworkDescriptor, get_network
from .utils.etherscan_utility import EtherscanUtility
from .utils.key_utility import KeyPair, derive_address, generate_key_pair

logger = logging.getLogger(__name__)


class EthereumAdapter:
    """Network descriptor, blockchain access and key helpers for one network."""

    def __init__(self, network: NetworkDescriptor, config: AdapterConfig) -> None:
        self.network = network
        self.config = config
        self._blockchain: BlockchainFacade | None = None

    def blockchain(self) -> BlockchainFacade:
        """Return the blockchain facade, creating it on first call."""
        if self._blockchain is None:
            etherscan = EtherscanUtility(
                api_url=self.config.explorer.api_url,
                api_key=self.config.explorer.api_key,
                chain_id=self.network.chain_id,
                request_timeout=self.config.explorer.request_timeout
            )
            self._blockchain = BlockchainFacade(
                etherscan,
                max_concurrent_requests=self.config.max_concurrent_requests
            )
            logger.debug(f"Blockchain facade created for {self.network.name}")

        return self._blockchain

    def generate_key_pair(self) -> KeyPair:
        return generate_key_pair()

    def derive_address(self, public_key: bytes) -> str:
        return derive_address(public_key)


def create_adapter(
    network_name: str,
    api_key: str | None = None,
    config: AdapterConfig | None = None
) -> EthereumAdapter:
    """Create an adapter for a named network.

    Args:
        network_name: Network name (e.g. 'mainnet', 'ropsten')
        api_key: Etherscan API key, used when config is not given
        config: Full configuration; its network must match network_name

    Returns:
        A ready to use EthereumAdapter (nothing is fetched yet)

    Raises:
        UnsupportedNetwork: If network_name is unknown
        ValueError: If the configuration is invalid
    """
    network = get_network(network_name)

    if config is None:
        config = AdapterConfig(network=network_name, explorer=ExplorerConfig(api_key=api_key or ""))
    elif config.network != network_name:
        raise ValueError(
            f"Configuration is for network {config.network}, not {network_name}"
        )

    logger.info(f"Created {network.blockchain_kind} adapter for {network.name} (chain {network.chain_id})")
    return EthereumAdapter(network, config)
