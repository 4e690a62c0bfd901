import logging
from collections.abc import Sequence
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class EtherscanUtility:
    """Thin async client for the Etherscan HTTP API.

    Each method returns the decoded JSON body untouched; interpreting
    status fields and error objects is left to the caller.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        chain_id: int,
        request_timeout: float = 30.0
    ) -> None:
        """Initialize the Etherscan client.

        Args:
            api_url: Base URL of the Etherscan API
            api_key: Etherscan API key
            chain_id: Chain to query (Etherscan v2 multichain parameter)
            request_timeout: HTTP timeout in seconds
        """
        if not api_url:
            raise ValueError("API URL is required")

        self.api_url: str = api_url
        self.api_key: str = api_key
        self.chain_id: int = chain_id
        self.request_timeout: float = request_timeout

    async def _api_get(self, module: str, action: str, **params: Any) -> Any:
        """Send one GET request to the API.

        Args:
            module: Etherscan module (e.g. 'proxy', 'account')
            action: Action within the module
            **params: Extra query parameters

        Returns:
            Decoded JSON response

        Raises:
            httpx.HTTPStatusError: If the request fails
        """
        query: dict[str, Any] = {
            "chainid": self.chain_id,
            "module": module,
            "action": action,
            **params,
            "apikey": self.api_key,
        }

        async with httpx.AsyncClient() as client:
            logger.debug(f"GET {self.api_url} module={module} action={action} {params}")
            response: httpx.Response = await client.get(
                self.api_url,
                params=query,
                timeout=self.request_timeout
            )
            response.raise_for_status()
            return response.json()

    async def get_block_number(self) -> dict[str, Any]:
        """Fetch the latest block number (hex encoded in the result)."""
        return await self._api_get("proxy", "eth_blockNumber")

    async def get_balance(self, addresses: Sequence[str]) -> dict[str, Any]:
        """Fetch balances in wei for one or more addresses.

        Args:
            addresses: Addresses with 0x marker

        Returns:
            Payload whose result is a list of {account, balance} entries
        """
        return await self._api_get(
            "account",
            "balancemulti",
            address=",".join(addresses),
            tag="latest"
        )

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any]:
        """Fetch a single transaction by its hash (with 0x marker)."""
        return await self._api_get("proxy", "eth_getTransactionByHash", txhash=tx_hash)

    async def list_transactions(self, address: str) -> dict[str, Any]:
        """Fetch the normal transaction history of an address, oldest first."""
        return await self._api_get(
            "account",
            "txlist",
            address=address,
            startblock=0,
            endblock=99999999,
            sort="asc"
        )
