"""
Agent Context

Holds everything a polling cycle needs that outlives a single cycle: the
validator identity, the chain connection registry, the home chain client and
the bound contract handles. Owned by the Poller and passed to every agent.
"""

import logging
from typing import Any, Callable, Optional

from web3 import Web3

from validator_agent.core.abi import load_abi, CONSENSUS_ABI, BLOCK_REWARD_ABI, BLOCK_REGISTRY_ABI
from validator_agent.core.config import Config
from validator_agent.core.exceptions import ConfigurationError, ChainConnectionError
from validator_agent.core.keystore import load_identity
from validator_agent.core.provider import build_web3, ensure_connected
from validator_agent.models.chain import ChainConnection
from validator_agent.models.identity import Identity
from validator_agent.repositories.connection_registry import ChainConnectionRegistry


class AgentContext:
    """
    Explicit mutable state shared by the agents of one process.

    Each initialization step runs at most once per process lifetime; calling
    `initialize()` again only performs the steps that have not completed.
    """

    def __init__(self,
                 config: Config,
                 identity_loader: Callable[..., Identity] = load_identity,
                 provider_factory: Callable[..., Any] = build_web3,
                 abi_loader: Callable[..., list] = load_abi):
        self.config = config
        self.identity_loader = identity_loader
        self.provider_factory = provider_factory
        self.abi_loader = abi_loader
        self.logger = logging.getLogger(__name__)

        self.identity: Optional[Identity] = None
        self.registry: Optional[ChainConnectionRegistry] = None
        self.home_w3: Any = None
        self.consensus: Any = None
        self.block_reward: Any = None
        self.block_registry: Any = None

    @property
    def initialized(self) -> bool:
        return all(part is not None for part in (
            self.identity, self.registry, self.home_w3,
            self.consensus, self.block_reward, self.block_registry,
        ))

    @property
    def account(self) -> str:
        return self.identity.address

    @property
    def home_chain_id(self) -> int:
        return self.config.chain.home_chain_id

    @property
    def home(self) -> ChainConnection:
        """The home chain's registry record."""
        return self.registry.get(self.home_chain_id)

    def initialize(self) -> 'AgentContext':
        """
        Run every initialization step that has not completed yet.

        Raises:
            CredentialError: If the validator key cannot be loaded
            ConfigurationError: If contract addresses or ABIs are missing
            ChainConnectionError: If the home chain RPC cannot be reached
        """
        if self.identity is None:
            self._init_identity()
        if self.registry is None:
            self._init_registry()
        if self.home_w3 is None:
            self._init_home_connection()
        if self.consensus is None:
            self.consensus = self._bind_contract('consensus_address', CONSENSUS_ABI)
        if self.block_reward is None:
            self.block_reward = self._bind_contract('block_reward_address', BLOCK_REWARD_ABI)
        if self.block_registry is None:
            self.block_registry = self._bind_contract('block_registry_address', BLOCK_REGISTRY_ABI)
        return self

    def _init_identity(self) -> None:
        self.logger.info("Loading validator identity")
        self.identity = self.identity_loader(self.config.keystore)
        self.logger.info(f"account: {self.identity.address}")

    def _init_registry(self) -> None:
        self.registry = ChainConnectionRegistry(
            identity=self.identity,
            home_chain_id=self.config.chain.home_chain_id,
            provider_factory=self.provider_factory,
            rpc_timeout=self.config.chain.rpc_timeout,
        )

    def _init_home_connection(self) -> None:
        rpc_url = self.config.chain.rpc_url
        self.logger.info(f"Connecting to home chain {self.home_chain_id} at {rpc_url}")

        connection = self.registry.upsert(self.home_chain_id, rpc_url)
        ensure_connected(connection.w3, rpc_url)

        try:
            reported_chain_id = connection.w3.eth.chain_id
        except Exception as e:
            raise ChainConnectionError(f"Could not read chain id from {rpc_url}: {e}") from e
        if reported_chain_id != self.home_chain_id:
            self.logger.warning(
                f"⚠️ RPC {rpc_url} reports chain id {reported_chain_id}, expected {self.home_chain_id}"
            )

        # Contract handles and transactions stay on this client for the
        # process lifetime, even if the registry later refreshes the record.
        self.home_w3 = connection.w3

    def _bind_contract(self, address_setting: str, abi_name: str) -> Any:
        address = getattr(self.config.contracts, address_setting)
        if not address or not Web3.is_address(address):
            raise ConfigurationError(f"{address_setting} must be configured with a valid address, got {address!r}")

        self.logger.info(f"Binding {abi_name} contract at {address}")
        abi = self.abi_loader(abi_name, self.config.contracts.abi_dir)
        return self.home_w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
