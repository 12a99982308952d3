"""
Tests for transaction submission and outcome reporting.
"""
from unittest.mock import Mock

import pytest
from web3.exceptions import ContractLogicError, TimeExhausted, TransactionNotFound

from validator_agent.agents.publish.transaction_emitter import TransactionEmitter
from validator_agent.models.action import OutcomeStatus

TX_HASH = '0x' + 'ab' * 32


@pytest.fixture
def emitter(context):
    return TransactionEmitter(context)


@pytest.fixture
def function_call(context):
    return context.consensus.functions.emitInitiateChange()


class TestTransactionEmitter:
    """Test the nonce, sign, send and receipt lifecycle."""

    def test_confirmed_transaction(self, emitter, function_call, context, identity):
        """Test that the pending nonce and configured gas settings are used."""
        outcome = emitter.submit(function_call, 'emitInitiateChange')

        assert outcome.status is OutcomeStatus.CONFIRMED
        assert outcome.confirmed
        assert outcome.tx_hash == TX_HASH
        assert outcome.block_number == 501
        assert outcome.gas_used == 42000
        assert outcome.nonce == 5

        context.home_w3.eth.get_transaction_count.assert_called_once_with(identity.address, 'pending')
        function_call.build_transaction.assert_called_once_with({
            'from': identity.address,
            'nonce': 5,
            'gas': 1000000,
            'gasPrice': 0,
        })
        context.home_w3.eth.wait_for_transaction_receipt.assert_called_once_with(
            TX_HASH, timeout=5, poll_latency=0.01
        )

    def test_signed_payload_is_sent(self, emitter, function_call, context):
        """Test that the raw signed transaction reaches send_raw_transaction."""
        emitter.submit(function_call, 'emitInitiateChange')

        raw = context.home_w3.eth.send_raw_transaction.call_args[0][0]
        assert isinstance(raw, bytes)
        assert len(raw) > 0

    def test_gas_overrides(self, emitter, function_call):
        emitter.submit(function_call, 'emitInitiateChange', gas_limit=300000, gas_price=2)

        params = function_call.build_transaction.call_args[0][0]
        assert params['gas'] == 300000
        assert params['gasPrice'] == 2

    def test_reverted_receipt_is_failed(self, emitter, function_call, context):
        context.home_w3.eth.wait_for_transaction_receipt.return_value = {'status': 0, 'blockNumber': 501}

        outcome = emitter.submit(function_call, 'emitInitiateChange')

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.reason == 'transaction reverted'
        assert outcome.tx_hash == TX_HASH

    @pytest.mark.parametrize('error,reason', [
        (TimeExhausted('waited too long'), 'no receipt before timeout'),
        (TransactionNotFound('gone'), 'transaction not found'),
        (ConnectionError('rpc down'), 'ConnectionError'),
    ])
    def test_receipt_errors_are_absorbed(self, emitter, function_call, context, error, reason):
        """Test that waiting failures keep the transaction hash on the failed outcome."""
        context.home_w3.eth.wait_for_transaction_receipt.side_effect = error

        outcome = emitter.submit(function_call, 'emitInitiateChange')

        assert outcome.status is OutcomeStatus.FAILED
        assert reason in outcome.reason
        assert outcome.tx_hash == TX_HASH
        assert outcome.nonce == 5

    def test_contract_logic_error_on_build(self, emitter, function_call, context):
        function_call.build_transaction.side_effect = ContractLogicError('execution reverted')

        outcome = emitter.submit(function_call, 'emitInitiateChange')

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.reason.startswith('contract error')
        assert outcome.tx_hash is None
        context.home_w3.eth.send_raw_transaction.assert_not_called()

    def test_nonce_failure_is_absorbed(self, emitter, function_call, context):
        context.home_w3.eth.get_transaction_count.side_effect = ConnectionError('rpc down')

        outcome = emitter.submit(function_call, 'emitInitiateChange')

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.nonce is None
        function_call.build_transaction.assert_not_called()

    def test_signing_failure_is_absorbed(self, emitter, context):
        function_call = Mock()
        function_call.build_transaction.return_value = {'gas': 1}

        outcome = emitter.submit(function_call, 'emitRewardedOnCycle')

        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.label == 'emitRewardedOnCycle'
        context.home_w3.eth.send_raw_transaction.assert_not_called()
