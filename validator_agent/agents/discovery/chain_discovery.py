"""
Chain discovery from the block registry's `Blockchain` events.
"""

from typing import Dict, List, Optional, Tuple

from validator_agent.agents.base import BaseAgent
from validator_agent.core.config import Config
from validator_agent.core.exceptions import ValidatorAgentError
from validator_agent.models.chain import ChainConnection


class ChainDiscoveryAgent(BaseAgent):
    """
    Reconciles registered chains against the connection registry.

    The full event log is replayed from block 0 every cycle. Chains are never
    un-registered, so the registry only grows or refreshes endpoints. An RPC
    failure while reading events propagates so that a partial chain list is
    never acted upon; a single registration that cannot be connected is
    logged and skipped.
    """

    def __init__(self, context, config: Optional[Config] = None):
        super().__init__(config or context.config, "ChainDiscoveryAgent")
        self.context = context

    def fetch_registered_chains(self) -> List[Tuple[int, str]]:
        """
        Read every `Blockchain(chainId, rpc)` event from the block registry.

        Returns:
            (chain id, rpc endpoint) pairs in log order
        """
        events = self.context.block_registry.events.Blockchain().get_logs(from_block=0, to_block='latest')
        return [(int(event['args']['chainId']), event['args']['rpc']) for event in events]

    @staticmethod
    def latest_endpoints(registered: List[Tuple[int, str]]) -> Dict[int, str]:
        """Collapse registrations to the last endpoint seen per chain."""
        endpoints: Dict[int, str] = {}
        for chain_id, rpc in registered:
            endpoints[chain_id] = rpc
        return endpoints

    def sync(self) -> List[Tuple[int, ChainConnection]]:
        """
        Bring the connection registry in line with the block registry.

        Returns:
            Every known (chain id, connection) pair, sorted by chain id, not
            just the ones changed by this call
        """
        registered = self.fetch_registered_chains()
        endpoints = self.latest_endpoints(registered)
        self.logger.info(f"🔍 Block registry lists {len(endpoints)} chains ({len(registered)} events)")

        registry = self.context.registry
        changed = 0
        for chain_id, rpc in endpoints.items():
            if not registry.needs_update(chain_id, rpc):
                continue
            try:
                registry.upsert(chain_id, rpc)
            except ValidatorAgentError as e:
                self.logger.error(f"❌ Skipping chain {chain_id} registered at {rpc!r}: {e}")
                continue
            changed += 1

        if changed:
            self.logger.info(f"Updated {changed} chain connections, {len(registry)} known")

        return sorted(registry.snapshot().items())

    def run(self) -> List[Tuple[int, ChainConnection]]:
        return self.sync()
