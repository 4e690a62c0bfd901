#!/usr/bin/env python3
"""Data models for the Etherscan adapter.

This module provides the canonical transaction record returned to callers and
the mutable chain height owned by each blockchain facade.
"""

from dataclasses import dataclass
from typing import Any


class ChainHeight:
    """Highest block number observed by one facade instance.

    The value only ever moves forward. It is written by the readiness gate on
    its first successful fetch and by the transaction normalizer whenever a
    record reveals a higher block.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int | None = None) -> None:
        self._value: int | None = value

    @property
    def value(self) -> int | None:
        return self._value

    def advance(self, height: int) -> int:
        """Raise the tracked height to height if it is higher.

        Args:
            height: A block number observed on chain

        Returns:
            The tracked height after the update
        """
        if self._value is None or height > self._value:
            self._value = height
        return self._value

    def __repr__(self) -> str:
        return f"ChainHeight({self._value})"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """A transaction in canonical form.

    Hashes, addresses and payload never carry the 0x marker, whatever the
    explorer sent.

    Attributes:
        block_height: Block containing the transaction (None while pending)
        tx_id: Transaction hash
        confirmations: Blocks mined on top of block_height (None if unknown)
        from_addresses: Sender address, as a one element tuple
        to_addresses: Recipient address, as a one element tuple (empty if unknown)
        data: Call payload
    """

    block_height: int | None
    tx_id: str
    confirmations: int | None
    from_addresses: tuple[str, ...]
    to_addresses: tuple[str, ...]
    data: str = ""

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"TransactionRecord(tx={self.tx_id[:10]}..., "
            f"block={self.block_height}, "
            f"confirmations={self.confirmations})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the canonical wire shape."""
        return {
            "blockHeight": self.block_height,
            "txId": self.tx_id,
            "confirmations": self.confirmations,
            "from": {"addresses": list(self.from_addresses)},
            "to": {"addresses": list(self.to_addresses)},
            "data": self.data,
        }


@dataclass(frozen=True, slots=True)
class BlockInfo:
    """Snapshot of the chain tip as seen by the adapter."""

    block_height: int

    def to_dict(self) -> dict[str, Any]:
        return {"blockHeight": self.block_height}
