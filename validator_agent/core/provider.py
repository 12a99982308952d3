"""
JSON-RPC client construction.
"""

from web3 import Web3

from validator_agent.core.exceptions import ChainConnectionError


def build_web3(rpc_url: str, timeout: int = 30) -> Web3:
    """
    Build a Web3 client bound to an HTTP JSON-RPC endpoint.

    No request is made; reachability surfaces on first use.
    """
    if not rpc_url:
        raise ChainConnectionError("RPC endpoint must be configured")

    try:
        provider = Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': timeout})
    except (TypeError, ValueError) as e:
        raise ChainConnectionError(f"Could not build provider for {rpc_url}: {e}") from e

    return Web3(provider)


def ensure_connected(w3: Web3, rpc_url: str) -> None:
    """Raise ChainConnectionError if the endpoint does not answer."""
    if not w3.is_connected():
        raise ChainConnectionError(f"Failed to connect to RPC at {rpc_url}")
