"""
Test configuration for pytest.

Every fixture works against mocked JSON-RPC clients; no test reaches a
network or reads a real keystore.
"""

from unittest.mock import Mock

import pytest
from eth_account import Account
from hexbytes import HexBytes

from validator_agent.core.config import Config
from validator_agent.models.identity import Identity
from validator_agent.services.context import AgentContext
from validator_agent.repositories.connection_registry import ChainConnectionRegistry

from helpers import (
    HOME_CHAIN_ID,
    HOME_RPC,
    PRIVATE_KEY,
    CONSENSUS_ADDRESS,
    BLOCK_REWARD_ADDRESS,
    BLOCK_REGISTRY_ADDRESS,
    VALIDATORS,
    FakeProviderFactory,
    build_transaction,
)


@pytest.fixture
def config():
    """Configuration with valid contract addresses and fast polling."""
    return Config(config_overrides={
        'chain': {'rpc_url': HOME_RPC, 'home_chain_id': HOME_CHAIN_ID},
        'contracts': {
            'consensus_address': CONSENSUS_ADDRESS,
            'block_reward_address': BLOCK_REWARD_ADDRESS,
            'block_registry_address': BLOCK_REGISTRY_ADDRESS,
        },
        'transactions': {'gas_limit': 1000000, 'gas_price': 0, 'receipt_timeout': 5, 'poll_latency': 0.01},
        'polling': {'interval_ms': 10, 'max_concurrent_chains': 4},
    })


@pytest.fixture
def identity():
    account = Account.from_key(PRIVATE_KEY)
    return Identity(address=account.address, private_key=bytes(account.key), account=account)


@pytest.fixture
def provider_factory():
    return FakeProviderFactory()


def _consensus_mock():
    consensus = Mock(name='consensus')
    functions = consensus.functions
    functions.isValidator.return_value.call.return_value = True
    functions.shouldEmitInitiateChange.return_value.call.return_value = False
    functions.getCurrentCycleEndBlock.return_value.call.return_value = 1000
    functions.currentValidatorsLength.return_value.call.return_value = len(VALIDATORS)
    functions.currentValidatorsAtPosition.side_effect = (
        lambda i: Mock(**{'call.return_value': VALIDATORS[i]})
    )
    functions.emitInitiateChange.return_value.build_transaction.side_effect = build_transaction
    return consensus


def _block_reward_mock():
    block_reward = Mock(name='block_reward')
    block_reward.functions.shouldEmitRewardedOnCycle.return_value.call.return_value = False
    block_reward.functions.emitRewardedOnCycle.return_value.build_transaction.side_effect = build_transaction
    return block_reward


def _block_registry_mock():
    block_registry = Mock(name='block_registry')
    block_registry.events.Blockchain.return_value.get_logs.return_value = []
    block_registry.functions.addSignedBlocks.return_value.build_transaction.side_effect = build_transaction
    return block_registry


@pytest.fixture
def context(config, identity, provider_factory):
    """
    An initialized AgentContext with mocked contracts.

    The home client confirms every transaction in block 501 and reports
    nonce 5 for the validator account.
    """
    ctx = AgentContext(
        config,
        identity_loader=lambda _keystore: identity,
        provider_factory=provider_factory,
    )
    ctx.identity = identity
    ctx.registry = ChainConnectionRegistry(identity, HOME_CHAIN_ID, provider_factory=provider_factory)

    home = ctx.registry.upsert(HOME_CHAIN_ID, HOME_RPC)
    home.w3.eth.block_number = 500
    home.w3.eth.get_transaction_count.return_value = 5
    home.w3.eth.send_raw_transaction.return_value = HexBytes('0x' + 'ab' * 32)
    home.w3.eth.wait_for_transaction_receipt.return_value = {'status': 1, 'blockNumber': 501, 'gasUsed': 42000}
    ctx.home_w3 = home.w3

    ctx.consensus = _consensus_mock()
    ctx.block_reward = _block_reward_mock()
    ctx.block_registry = _block_registry_mock()
    return ctx


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as exercising a full polling cycle"
    )
