"""
Publisher for signed block batches to the home chain block registry.
"""

from typing import List, Optional

from validator_agent.agents.base import BaseAgent
from validator_agent.agents.publish.transaction_emitter import TransactionEmitter
from validator_agent.core.config import Config
from validator_agent.models.action import Outcome
from validator_agent.models.attestation import BlockAttestation, to_registry_batch


class RegistryPublisher(BaseAgent):
    """Submits one cycle's attestations as a single `addSignedBlocks` call."""

    def __init__(self, context, emitter: Optional[TransactionEmitter] = None, config: Optional[Config] = None):
        super().__init__(config or context.config, "RegistryPublisher")
        self.context = context
        self.emitter = emitter or TransactionEmitter(context, self.config)

    def publish(self, attestations: List[BlockAttestation]) -> Optional[Outcome]:
        """
        Publish attestations to the block registry.

        Args:
            attestations: Attestations produced this cycle

        Returns:
            Outcome of the submission, or None when there was nothing to submit
        """
        if not attestations:
            self.logger.warning("No attestations produced this cycle, skipping addSignedBlocks")
            return None

        chain_ids = ', '.join(str(a.chain_id) for a in attestations)
        self.logger.info(f"📚 Publishing {len(attestations)} signed blocks (chains: {chain_ids})")

        function_call = self.context.block_registry.functions.addSignedBlocks(to_registry_batch(attestations))
        return self.emitter.submit(function_call, 'addSignedBlocks')

    def run(self, attestations: List[BlockAttestation]) -> Optional[Outcome]:
        return self.publish(attestations)
