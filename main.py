#!/usr/bin/env python3
"""Command line entry point for the Etherscan adapter.

Runs a single query against the configured network and prints the result
as JSON.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

import httpx

# Configure logging before any other imports create loggers
def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.
    
    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

# Get logger for this module
logger = logging.getLogger(__name__)

from etherscan_adapter import AdapterConfig, AdapterError, create_adapter
from etherscan_adapter.blockchain import BlockchainFacade


async def run_command(blockchain: BlockchainFacade, args: argparse.Namespace) -> Any:
    """Dispatch the parsed command to the blockchain facade."""
    match args.command:
        case "info":
            return (await blockchain.info()).to_dict()
        case "tx":
            return [record.to_dict() for record in await blockchain.get_transactions(args.hashes)]
        case "address-txs":
            records = await blockchain.list_address_transactions(args.addresses)
            return [record.to_dict() for record in records]
        case "balance":
            return {"address": args.address, "balance": await blockchain.get_balance(args.address)}


async def main() -> None:
    """Main entry point for the Etherscan adapter CLI.
    
    Raises:
        SystemExit: On configuration or runtime errors
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Etherscan Adapter - Query Ethereum block height, transactions and balances",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  ETHERSCAN_API_KEY       - Etherscan API key (required)
  ETHERSCAN_API_URL       - Etherscan API base URL (default: https://api.etherscan.io/v2/api)
  NETWORK                 - Network name (default: mainnet)
  REQUEST_TIMEOUT         - HTTP request timeout in seconds (default: 30)
  MAX_CONCURRENT_REQUESTS - Batch size for multi-item lookups (default: 3)
  LOG_LEVEL               - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument(
        "--network",
        default=None,
        help="Network name, overrides NETWORK"
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("info", help="Show the current block height")
    tx_parser = subparsers.add_parser("tx", help="Fetch transactions by hash")
    tx_parser.add_argument("hashes", nargs="+")
    history_parser = subparsers.add_parser("address-txs", help="List transactions of addresses")
    history_parser.add_argument("addresses", nargs="+")
    balance_parser = subparsers.add_parser("balance", help="Show the balance of an address in wei")
    balance_parser.add_argument("address")
    args: argparse.Namespace = parser.parse_args()
    
    setup_logging(args.log_level)
    
    try:
        config: AdapterConfig = AdapterConfig.from_env(network=args.network)
        config.log_config()
        
        adapter = create_adapter(config.network, config=config)
        async with adapter.blockchain() as blockchain:
            result = await run_command(blockchain, args)
        
        print(json.dumps(result, indent=2))
        
    except (AdapterError, httpx.HTTPError) as e:
        logger.error(f"Query failed: {e}")
        sys.exit(1)
        
    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your environment variables:")
        logger.error("  - ETHERSCAN_API_KEY: Etherscan API key")
        logger.error("  - NETWORK: Network name (default: mainnet)")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
