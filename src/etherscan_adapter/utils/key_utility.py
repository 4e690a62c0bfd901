from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys import keys
from web3 import Web3

from ..errors import InvalidArgument

UNCOMPRESSED_KEY_LENGTH: int = 65
RAW_KEY_LENGTH: int = 64


@dataclass(frozen=True, slots=True)
class KeyPair:
    """A secp256k1 key pair.

    Attributes:
        public_key: Uncompressed public key (65 bytes, leading 0x04)
        private_key: Private key (32 bytes)
    """

    public_key: bytes
    private_key: bytes


def derive_address(public_key: bytes) -> str:
    """Derive the account address belonging to a public key.

    The address is the last 20 bytes of the keccak-256 hash of the 64 raw
    key bytes. A 65 byte uncompressed key has its leading byte stripped first.

    Args:
        public_key: Uncompressed (65 bytes) or raw (64 bytes) public key

    Returns:
        Lowercase hex address without the 0x marker

    Raises:
        InvalidArgument: If the key has any other length
    """
    match len(public_key):
        case 65:
            raw_key = public_key[1:]
        case 64:
            raw_key = public_key
        case length:
            raise InvalidArgument(
                f"Invalid public key length. Expected {UNCOMPRESSED_KEY_LENGTH} "
                f"or {RAW_KEY_LENGTH} bytes, got {length}"
            )

    return bytes(Web3.keccak(bytes(raw_key))[-20:]).hex()


def generate_key_pair() -> KeyPair:
    """Create a fresh random key pair."""
    account: LocalAccount = Account.create()
    private_key = keys.PrivateKey(bytes(account.key))
    return KeyPair(
        public_key=b"\x04" + private_key.public_key.to_bytes(),
        private_key=private_key.to_bytes()
    )
