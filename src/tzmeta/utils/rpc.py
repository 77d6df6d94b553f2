"""Minimal Tezos node RPC helpers.

Only the chain id lookup lives here; contract loading and storage decoding
are delegated to the application's [ChainClient][tzmeta.chain.base.ChainClient].
"""

from __future__ import annotations

import logging

import aiohttp

from .codec import parse_json


logger = logging.getLogger("tzmeta.utils.rpc")


async def load_chain_id(rpc_url: str, *, timeout: float = 10.0) -> str:  # noqa: ASYNC109
    """Return the chain id of the node at *rpc_url*.

    Issues ``GET {rpc_url}/chains/main/chain_id``.

    Args:
        rpc_url: Base URL of the node RPC, with or without trailing slash.
        timeout: Total request timeout in seconds.

    Raises:
        aiohttp.ClientError: If the request fails or returns a non-2xx status.
        TimeoutError: If the request exceeds *timeout*.
        ValueError: If the body is not a JSON string.
    """
    url = f"{rpc_url.rstrip('/')}/chains/main/chain_id"
    async with (
        aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session,
        session.get(url) as response,
    ):
        response.raise_for_status()
        chain_id = parse_json(await response.read())
    if not isinstance(chain_id, str):
        raise ValueError(f"Expected chain id string, got {type(chain_id).__name__}")
    logger.debug("chain_id_loaded rpc=%s chain_id=%s", rpc_url, chain_id)
    return chain_id
