"""
Network Connection
Opens the async RPC connection used by every deployment step
"""

from typing import Optional
from web3 import AsyncWeb3, AsyncHTTPProvider
from loguru import logger

from .errors import ConfigurationError


async def connect_network(rpc_url: str, expected_chain_id: Optional[int] = None) -> AsyncWeb3:
    """
    Return a connected AsyncWeb3 instance or raise if unreachable

    Args:
        rpc_url: HTTP RPC endpoint
        expected_chain_id: Chain ID the endpoint must report (None = any)

    Returns:
        Connected AsyncWeb3 instance
    """
    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))

    if not await w3.is_connected():
        raise ConfigurationError(f"Failed to connect to RPC endpoint: {rpc_url}")

    try:
        chain_id = await w3.eth.chain_id
    except Exception as e:
        raise ConfigurationError(f"Failed to read chain ID from {rpc_url}: {e}", cause=e) from e

    if expected_chain_id is not None and chain_id != expected_chain_id:
        raise ConfigurationError(
            f"RPC endpoint {rpc_url} reports chain ID {chain_id}, expected {expected_chain_id}"
        )

    logger.info(f"Connected to {rpc_url} (chain ID: {chain_id})")
    return w3
