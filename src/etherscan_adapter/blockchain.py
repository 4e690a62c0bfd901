#!/usr/bin/env python3
"""Public blockchain interface backed by the Etherscan API.

Every operation waits on the readiness gate, sends its remote calls through
exec_remote, fans multi-item lookups out through the bounded batch executor
and shapes transactions with the normalizer.
"""

import logging
from collections.abc import Sequence
from itertools import chain
from typing import TYPE_CHECKING, Any

from .batch import BoundedBatchExecutor, require_sequence
from .errors import InvalidArgument, RemoteAPIError, TransportError
from .models import BlockInfo, ChainHeight, TransactionRecord
from .normalizer import TransactionNormalizer
from .readiness import ReadinessGate
from .remote_call import exec_remote
from .utils.hex_utility import prefix_hex, unhexint

if TYPE_CHECKING:
    from .utils.etherscan_utility import EtherscanUtility

logger = logging.getLogger(__name__)

MAX_CONCURRENT_REQUESTS: int = 3


class BlockchainFacade:
    """Block height, transaction, history and balance queries for one network.

    Hashes and addresses may be passed with or without the 0x marker; results
    never carry it.
    """

    def __init__(
        self,
        etherscan: "EtherscanUtility",
        max_concurrent_requests: int = MAX_CONCURRENT_REQUESTS
    ) -> None:
        """
        Initialize the facade.

        Args:
            etherscan: Client for the Etherscan API
            max_concurrent_requests: Batch size for multi-item lookups
        """
        self.etherscan = etherscan
        self.max_concurrent_requests = max_concurrent_requests

        self.chain_height = ChainHeight()
        self.normalizer = TransactionNormalizer(self.chain_height)
        self.executor = BoundedBatchExecutor(max_concurrent_requests)
        self.gate = ReadinessGate(self._fetch_block_number, on_ready=self.chain_height.advance)

    async def __aenter__(self) -> "BlockchainFacade":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Release resources. Nothing is held between requests, so this is a no-op."""

    async def _fetch_block_number(self) -> int:
        result = await exec_remote(self.etherscan.get_block_number())
        return unhexint(result)

    async def info(self) -> BlockInfo:
        """Fetch the chain tip and return the highest height seen so far."""
        if not self.gate.is_ready:
            # The initializing fetch already read the chain tip
            await self.gate.ensure_ready()
            return BlockInfo(block_height=self.chain_height.value)

        height = self.chain_height.advance(await self._fetch_block_number())
        return BlockInfo(block_height=height)

    async def latest_block(self) -> BlockInfo:
        return await self.info()

    async def get_transactions(self, hashes: Sequence[str]) -> list[TransactionRecord]:
        """Look up transactions by hash.

        Lookups that fail, including unknown hashes, are left out of the
        result rather than failing the whole call.

        Args:
            hashes: Transaction hashes

        Returns:
            Records for the hashes that could be fetched, in input order

        Raises:
            InvalidArgument: If hashes is not a sequence
            InitializationError: If the initial height fetch failed
        """
        require_sequence(hashes, "transaction hashes")
        await self.gate.ensure_ready()
        return await self.executor.run(hashes, self._get_transaction)

    async def _get_transaction(self, tx_hash: str) -> TransactionRecord:
        result = await exec_remote(self.etherscan.get_transaction_by_hash(prefix_hex(tx_hash)))
        if result is None:
            raise RemoteAPIError(None, f"Transaction {tx_hash} not found")
        return self.normalizer.normalize(result)

    async def list_address_transactions(self, addresses: Sequence[str]) -> list[TransactionRecord]:
        """List the transaction history of several addresses.

        Args:
            addresses: Account addresses

        Returns:
            All records, grouped by address in input order, each address's
            history oldest first. An address whose lookup failed contributes
            nothing.

        Raises:
            InvalidArgument: If addresses is not a sequence
            InitializationError: If the initial height fetch failed
        """
        require_sequence(addresses, "addresses")
        await self.gate.ensure_ready()
        per_address = await self.executor.run(addresses, self._list_transactions_for_address)
        return list(chain.from_iterable(per_address))

    async def _list_transactions_for_address(self, address: str) -> list[TransactionRecord]:
        result = await exec_remote(self.etherscan.list_transactions(prefix_hex(address)))
        logger.debug(f"Fetched {len(result)} transactions for {address}")
        return [self.normalizer.normalize(tx) for tx in result]

    async def get_balance(self, address: str) -> str:
        """Fetch an address's balance in wei.

        Returns:
            The balance as a decimal string, never a float

        Raises:
            InvalidArgument: If address is not a string
            InitializationError: If the initial height fetch failed
        """
        if not isinstance(address, str):
            raise InvalidArgument(f"expected an address string, got {type(address).__name__}")

        await self.gate.ensure_ready()
        result = await exec_remote(self.etherscan.get_balance([prefix_hex(address)]))

        match result:
            case [{"balance": balance}, *_]:
                return str(balance)
            case str() as balance if balance.isdecimal():
                return balance
            case _:
                raise TransportError(f"Unexpected balance response for {address}: {result!r}")
