#!/usr/bin/env python3
"""Tests for adapter construction and the network table."""

import pytest

from etherscan_adapter import create_adapter
from etherscan_adapter.blockchain import BlockchainFacade
from etherscan_adapter.config import AdapterConfig, ExplorerConfig
from etherscan_adapter.errors import UnsupportedNetwork
from etherscan_adapter.networks import NETWORKS, get_network


class TestNetworks:
    """Tests for the network descriptors."""

    def test_ropsten(self):
        network = get_network("ropsten")

        assert network.name == "ropsten"
        assert network.blockchain_kind == "ethereum"
        assert network.curve == "secp256k1"
        assert network.min_output_amount == 1
        assert network.constants["chainId"] == 3
        assert network.chain_id == 3

    def test_all_networks_are_ethereum(self):
        for network in NETWORKS.values():
            assert network.blockchain_kind == "ethereum"
            assert isinstance(network.chain_id, int)

    def test_unknown_network(self):
        with pytest.raises(UnsupportedNetwork, match="dogecoin") as exc_info:
            get_network("dogecoin")

        assert exc_info.value.network_name == "dogecoin"
        assert isinstance(exc_info.value, ValueError)

    def test_descriptor_is_immutable(self):
        network = get_network("mainnet")

        with pytest.raises(AttributeError):
            network.name = "other"
        with pytest.raises(TypeError):
            network.constants["chainId"] = 99

    def test_to_dict(self):
        assert get_network("mainnet").to_dict() == {
            "name": "mainnet",
            "blockchain": "ethereum",
            "minOutputAmount": 1,
            "curve": "secp256k1",
            "constants": {"chainId": 1},
        }


class TestCreateAdapter:
    """Tests for create_adapter and EthereumAdapter."""

    def test_unsupported_network_raises_immediately(self):
        with pytest.raises(UnsupportedNetwork):
            create_adapter("dogecoin", api_key="key")

    def test_missing_api_key(self):
        with pytest.raises(ValueError, match="API key is required"):
            create_adapter("ropsten")

    def test_network_descriptor(self):
        adapter = create_adapter("ropsten", api_key="key")

        assert adapter.network is get_network("ropsten")
        assert adapter.config.max_concurrent_requests == 3

    def test_blockchain_is_memoized(self):
        adapter = create_adapter("ropsten", api_key="key")

        blockchain = adapter.blockchain()

        assert isinstance(blockchain, BlockchainFacade)
        assert adapter.blockchain() is blockchain
        assert blockchain.etherscan.chain_id == 3
        assert blockchain.etherscan.api_key == "key"

    def test_explicit_config(self):
        config = AdapterConfig(
            network="sepolia",
            explorer=ExplorerConfig(api_key="key", request_timeout=5),
            max_concurrent_requests=2
        )

        blockchain = create_adapter("sepolia", config=config).blockchain()

        assert blockchain.max_concurrent_requests == 2
        assert blockchain.etherscan.request_timeout == 5
        assert blockchain.etherscan.chain_id == 11155111

    def test_config_network_mismatch(self):
        config = AdapterConfig(network="sepolia", explorer=ExplorerConfig(api_key="key"))

        with pytest.raises(ValueError, match="not mainnet"):
            create_adapter("mainnet", config=config)

    def test_key_helpers(self):
        adapter = create_adapter("mainnet", api_key="key")

        key_pair = adapter.generate_key_pair()

        assert len(adapter.derive_address(key_pair.public_key)) == 40
