#!/usr/bin/env python3
"""Static descriptors of the Ethereum networks the adapter can talk to."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar

from .errors import UnsupportedNetwork


@dataclass(frozen=True, slots=True)
class NetworkDescriptor:
    """Immutable description of one network.

    Attributes:
        name: Network name (e.g. 'mainnet', 'ropsten')
        min_output_amount: Smallest transferable amount, in wei
        curve: Elliptic curve used for account keys
        constants: Chain specific constants such as chainId
        blockchain_kind: Blockchain family, always 'ethereum' here
    """

    BLOCKCHAIN_KIND: ClassVar[str] = "ethereum"

    name: str
    min_output_amount: int = 1
    curve: str = "secp256k1"
    constants: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @property
    def blockchain_kind(self) -> str:
        return self.BLOCKCHAIN_KIND

    @property
    def chain_id(self) -> int:
        return self.constants["chainId"]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "blockchain": self.blockchain_kind,
            "minOutputAmount": self.min_output_amount,
            "curve": self.curve,
            "constants": dict(self.constants),
        }


def _network(name: str, chain_id: int) -> NetworkDescriptor:
    return NetworkDescriptor(name=name, constants=MappingProxyType({"chainId": chain_id}))


NETWORKS: MappingProxyType = MappingProxyType({
    network.name: network
    for network in (
        _network("mainnet", 1),
        _network("ropsten", 3),
        _network("rinkeby", 4),
        _network("goerli", 5),
        _network("kovan", 42),
        _network("holesky", 17000),
        _network("sepolia", 11155111),
    )
})


def get_network(name: str) -> NetworkDescriptor:
    """Look up a network by name.

    Raises:
        UnsupportedNetwork: If name is not a known network
    """
    try:
        return NETWORKS[name]
    except KeyError:
        raise UnsupportedNetwork(name) from None
