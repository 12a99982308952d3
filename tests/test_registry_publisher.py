"""
Tests for publishing signed blocks to the block registry.
"""
from unittest.mock import Mock

from validator_agent.agents.publish.registry_publisher import RegistryPublisher
from validator_agent.models.action import Outcome
from validator_agent.models.attestation import BlockAttestation


def make_attestation(chain_id):
    return BlockAttestation(
        chain_id=chain_id,
        block_number=10,
        block_hash=bytes([chain_id]) * 32,
        rlp_header=b'\xc0',
        signature=b'\x01' * 65,
    )


class TestRegistryPublisher:
    """Test the addSignedBlocks submission."""

    def test_empty_batch_is_skipped(self, context):
        emitter = Mock()

        assert RegistryPublisher(context, emitter).publish([]) is None
        emitter.submit.assert_not_called()
        context.block_registry.functions.addSignedBlocks.assert_not_called()

    def test_single_submission_for_all_attestations(self, context):
        emitter = Mock()
        emitter.submit.return_value = Outcome.failure('addSignedBlocks', 'transaction reverted')
        attestations = [make_attestation(1), make_attestation(56)]

        outcome = RegistryPublisher(context, emitter).publish(attestations)

        add_signed_blocks = context.block_registry.functions.addSignedBlocks
        add_signed_blocks.assert_called_once_with([a.to_contract_args() for a in attestations])
        emitter.submit.assert_called_once_with(add_signed_blocks.return_value, 'addSignedBlocks')
        assert outcome is emitter.submit.return_value

    def test_default_emitter_sends_transaction(self, context):
        outcome = RegistryPublisher(context).publish([make_attestation(1)])

        assert outcome.confirmed
        assert outcome.label == 'addSignedBlocks'
        context.home_w3.eth.send_raw_transaction.assert_called_once()
