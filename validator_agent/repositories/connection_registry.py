"""
In-memory registry of live chain connections.
"""

import logging
from typing import Callable, Dict, List, Optional

from eth_account import Account

from validator_agent.core.provider import build_web3
from validator_agent.models.chain import ChainConnection, ChainRole
from validator_agent.models.identity import Identity


class ChainConnectionRegistry:
    """
    Maps chain ids to live connections.

    Chains are only ever added or refreshed, never removed, matching the
    append-only registry contract. One record exists per chain id; a changed
    endpoint replaces the client on the existing record.
    """

    def __init__(self,
                 identity: Identity,
                 home_chain_id: int,
                 provider_factory: Callable[..., object] = build_web3,
                 rpc_timeout: int = 30):
        """
        Initialize an empty registry.

        Args:
            identity: Validator identity whose key signs for every chain
            home_chain_id: Chain id that receives the HOME role
            provider_factory: Builds a client from an RPC endpoint
            rpc_timeout: HTTP timeout passed to the provider factory
        """
        self.identity = identity
        self.home_chain_id = int(home_chain_id)
        self.provider_factory = provider_factory
        self.rpc_timeout = rpc_timeout
        self.logger = logging.getLogger(f"repositories.{self.__class__.__name__}")
        self._connections: Dict[int, ChainConnection] = {}

    def get(self, chain_id: int) -> Optional[ChainConnection]:
        return self._connections.get(int(chain_id))

    def needs_update(self, chain_id: int, rpc_endpoint: str) -> bool:
        """True when the chain is unknown or its stored endpoint differs."""
        connection = self.get(chain_id)
        return connection is None or connection.rpc_endpoint != rpc_endpoint

    def role_for(self, chain_id: int) -> ChainRole:
        return ChainRole.HOME if int(chain_id) == self.home_chain_id else ChainRole.SATELLITE

    def upsert(self, chain_id: int, rpc_endpoint: str) -> ChainConnection:
        """
        Create or refresh the connection for a chain.

        Args:
            chain_id: Chain identifier
            rpc_endpoint: JSON-RPC endpoint the chain is reachable at

        Returns:
            The stored connection record
        """
        chain_id = int(chain_id)
        connection = self._connections.get(chain_id)

        if connection is not None and connection.rpc_endpoint == rpc_endpoint:
            return connection

        w3 = self.provider_factory(rpc_endpoint, timeout=self.rpc_timeout)

        if connection is None:
            connection = ChainConnection(
                chain_id=chain_id,
                rpc_endpoint=rpc_endpoint,
                role=self.role_for(chain_id),
                account=self.identity.address,
                signer=Account.from_key(self.identity.private_key),
                w3=w3,
            )
            self._connections[chain_id] = connection
            self.logger.info(f"➕ Added {connection.role.value} chain {chain_id} at {rpc_endpoint}")
        else:
            previous = connection.rpc_endpoint
            connection.rpc_endpoint = rpc_endpoint
            connection.w3 = w3
            self.logger.info(f"🔄 Chain {chain_id} endpoint changed from {previous} to {rpc_endpoint}")

        return connection

    def snapshot(self) -> Dict[int, ChainConnection]:
        """Copy of the current chain id to connection mapping."""
        return dict(self._connections)

    @property
    def chain_ids(self) -> List[int]:
        return sorted(self._connections)

    def __contains__(self, chain_id) -> bool:
        return int(chain_id) in self._connections

    def __len__(self) -> int:
        return len(self._connections)
