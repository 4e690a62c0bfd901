#!/usr/bin/env python3
"""Conversion of raw explorer transactions into TransactionRecords.

The normalizer also keeps the owning facade's ChainHeight current: any
transaction mined in a block above the tracked height moves it forward.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .models import ChainHeight, TransactionRecord
from .utils.hex_utility import has_hex_prefix, unhexint, unprefix_hex

logger = logging.getLogger(__name__)


def parse_block_number(value: Any) -> int | None:
    """Parse a block number given as int, decimal string or 0x hex string.

    Returns:
        The block number, or None if value cannot be parsed
    """
    match value:
        case bool():
            return None
        case int():
            return value
        case str() if has_hex_prefix(value):
            try:
                return unhexint(value)
            except ValueError:
                return None
        case str() if value.isdecimal():
            return int(value)
        case _:
            return None


def _addresses(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    return (unprefix_hex(value),)


class TransactionNormalizer:
    """Shapes raw transactions and tracks the highest block seen."""

    def __init__(self, chain_height: ChainHeight) -> None:
        """
        Args:
            chain_height: Height tracker owned by the facade
        """
        self.chain_height = chain_height

    def normalize(self, raw_tx: Mapping[str, Any]) -> TransactionRecord:
        """Convert one raw transaction into canonical form.

        Never raises on a bad block number: the record comes back with
        unknown confirmations instead.

        Args:
            raw_tx: Transaction as returned by eth_getTransactionByHash or txlist

        Returns:
            The canonical TransactionRecord
        """
        tx_hash = raw_tx.get("hash") or ""
        block_number = parse_block_number(raw_tx.get("blockNumber"))

        confirmations: int | None = None
        if block_number is None:
            logger.warning(
                f"Unparseable block number {raw_tx.get('blockNumber')!r} "
                f"for tx {tx_hash}, confirmations unknown"
            )
        else:
            # Advance first so confirmations never use a height below the tx's own block
            height = self.chain_height.advance(block_number)
            confirmations = height - block_number

        # Contract creations have no recipient; txlist reports the new contract instead
        recipient = raw_tx.get("to") or raw_tx.get("contractAddress")

        return TransactionRecord(
            block_height=block_number,
            tx_id=unprefix_hex(tx_hash),
            confirmations=confirmations,
            from_addresses=_addresses(raw_tx.get("from")),
            to_addresses=_addresses(recipient),
            data=unprefix_hex(raw_tx.get("input") or "")
        )
