"""
Tests for models, ABI loading and provider construction.
"""
import json
import os
import tempfile
import unittest
from unittest.mock import Mock, patch

from web3 import Web3

from validator_agent.core.abi import load_abi, BLOCK_REGISTRY_ABI
from validator_agent.core.config import ContractConfig
from validator_agent.core.exceptions import ChainConnectionError, ConfigurationError
from validator_agent.core.provider import build_web3, ensure_connected
from validator_agent.models.action import Outcome, OutcomeStatus


class TestOutcome(unittest.TestCase):
    """Test Outcome construction from receipts."""

    def test_success_reads_receipt(self):
        outcome = Outcome.success('emitInitiateChange', '0xabc', {'status': 1, 'blockNumber': 7, 'gasUsed': 21000}, nonce=3)

        self.assertIs(outcome.status, OutcomeStatus.CONFIRMED)
        self.assertTrue(outcome.confirmed)
        self.assertEqual(outcome.block_number, 7)
        self.assertEqual(outcome.gas_used, 21000)
        self.assertEqual(outcome.nonce, 3)
        self.assertIsNone(outcome.reason)

    def test_failure(self):
        outcome = Outcome.failure('emitRewardedOnCycle', 'transaction reverted', tx_hash='0xdef')

        self.assertFalse(outcome.confirmed)
        self.assertEqual(outcome.reason, 'transaction reverted')
        self.assertEqual(outcome.tx_hash, '0xdef')


class TestLoadAbi(unittest.TestCase):
    """Test ABI lookup order."""

    def test_packaged_registry_abi(self):
        abi = load_abi(BLOCK_REGISTRY_ABI)

        names = {entry.get('name') for entry in abi}
        self.assertIn('Blockchain', names)
        self.assertIn('addSignedBlocks', names)

    def test_abi_dir_takes_precedence(self):
        with tempfile.TemporaryDirectory() as abi_dir:
            with open(os.path.join(abi_dir, 'consensus.json'), 'w') as f:
                json.dump([{'type': 'function', 'name': 'custom'}], f)

            self.assertEqual(load_abi('consensus', abi_dir), [{'type': 'function', 'name': 'custom'}])

    def test_unknown_abi(self):
        with self.assertRaises(ConfigurationError):
            load_abi('doesNotExist')

    @patch.dict(os.environ, {'ABI_DIR': '/opt/abis'})
    def test_abi_dir_from_environment(self):
        self.assertEqual(ContractConfig().abi_dir, '/opt/abis')


class TestProvider(unittest.TestCase):
    """Test JSON-RPC client construction."""

    def test_build_web3_binds_endpoint(self):
        w3 = build_web3('http://localhost:8545', timeout=12)

        self.assertIsInstance(w3, Web3)
        self.assertEqual(w3.provider.endpoint_uri, 'http://localhost:8545')

    def test_empty_endpoint(self):
        with self.assertRaises(ChainConnectionError):
            build_web3('')

    def test_ensure_connected(self):
        w3 = Mock()
        w3.is_connected.return_value = False

        with self.assertRaises(ChainConnectionError):
            ensure_connected(w3, 'http://localhost:8545')
