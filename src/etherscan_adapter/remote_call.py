#!/usr/bin/env python3
"""Uniform handling of remote call outcomes.

Every outbound explorer call goes through exec_remote. Errors the explorer
reports inside a payload become typed adapter errors; exceptions raised while
making the call propagate as they are.
"""

import logging
from collections.abc import Awaitable
from typing import Any

from .errors import RemoteAPIError, TransportError

logger = logging.getLogger(__name__)

# Etherscan answers an empty history with status "0" instead of an empty "1"
NO_TRANSACTIONS_MESSAGE: str = "No transactions found"


def normalize_result(payload: Any) -> Any:
    """Extract the result from a decoded explorer payload.

    Args:
        payload: Decoded JSON body of the explorer response

    Returns:
        The payload's result field

    Raises:
        RemoteAPIError: If the payload carries a structured error object
        TransportError: If the payload reports a failure as a bare message
    """
    match payload:
        case {"error": {"message": message, **details}}:
            raise RemoteAPIError(details.get("code"), message)
        case {"error": dict() as error}:
            raise RemoteAPIError(error.get("code"), str(error))
        case {"error": error}:
            raise TransportError(str(error))
        case {"status": "0", "message": str() as message, **rest}:
            result = rest.get("result")
            if message.startswith(NO_TRANSACTIONS_MESSAGE):
                return result or []
            # Etherscan puts the useful text in result when it is a string
            raise TransportError(result if isinstance(result, str) and result else message)
        case {"result": result}:
            return result
        case _:
            raise TransportError(f"Unexpected response from explorer: {payload!r}")


async def exec_remote(call: Awaitable[Any]) -> Any:
    """Await a raw explorer call and normalize its outcome.

    Exceptions raised by the call, httpx and adapter errors alike, propagate
    unchanged. Only failures the explorer reports inside the
    payload are turned into adapter errors, by normalize_result.

    Args:
        call: Awaitable returning the decoded explorer payload

    Returns:
        The result carried by the payload
    """
    try:
        payload = await call
    except Exception as e:
        logger.debug(f"Remote call failed: {type(e).__name__}: {e}")
        raise

    return normalize_result(payload)
