"""
Shared builders for validator agent tests.
"""

from typing import Any, Dict, List
from unittest.mock import Mock

from hexbytes import HexBytes
from web3 import Web3

from validator_agent.core.exceptions import ChainConnectionError

HOME_CHAIN_ID = 122
HOME_RPC = 'https://rpc.home.test'
PRIVATE_KEY = '0x' + '4c' * 32

CONSENSUS_ADDRESS = '0x' + '11' * 20
BLOCK_REWARD_ADDRESS = '0x' + '22' * 20
BLOCK_REGISTRY_ADDRESS = '0x' + '33' * 20

VALIDATORS = [
    Web3.to_checksum_address('0x' + 'a1' * 20),
    Web3.to_checksum_address('0x' + 'b2' * 20),
]


def make_block(number: int = 100, **overrides) -> Dict[str, Any]:
    """A post-London block as web3 returns it from `eth_getBlockByNumber`."""
    block = {
        'hash': HexBytes(Web3.keccak(text=f'block-{number}')),
        'parentHash': HexBytes(b'\x01' * 32),
        'sha3Uncles': HexBytes(b'\x02' * 32),
        'miner': Web3.to_checksum_address('0x' + '5e' * 20),
        'stateRoot': HexBytes(b'\x03' * 32),
        'transactionsRoot': HexBytes(b'\x04' * 32),
        'receiptsRoot': HexBytes(b'\x05' * 32),
        'logsBloom': HexBytes(b'\x00' * 256),
        'difficulty': 0,
        'number': number,
        'gasLimit': 30000000,
        'gasUsed': 21000,
        'timestamp': 1700000000 + number,
        'extraData': HexBytes(b'validator'),
        'mixHash': HexBytes(b'\x06' * 32),
        'nonce': HexBytes(b'\x00' * 8),
        'baseFeePerGas': 7,
    }
    block.update(overrides)
    return block


def build_transaction(params: Dict[str, Any]) -> Dict[str, Any]:
    """Stand-in for ContractFunction.build_transaction returning a signable legacy transaction."""
    transaction = dict(params)
    transaction.update({
        'to': Web3.to_checksum_address(CONSENSUS_ADDRESS),
        'data': '0x',
        'value': 0,
        'chainId': HOME_CHAIN_ID,
    })
    return transaction


def blockchain_event(chain_id: int, rpc: str) -> Dict[str, Any]:
    return {'event': 'Blockchain', 'args': {'chainId': chain_id, 'rpc': rpc}}


class FakeProviderFactory:
    """Provider factory handing out one Mock client per call and recording endpoints."""

    def __init__(self):
        self.calls: List[str] = []
        self.clients: Dict[str, Mock] = {}

    def __call__(self, rpc_url: str, timeout: int = 30) -> Mock:
        if not rpc_url:
            raise ChainConnectionError("RPC endpoint must be configured")
        w3 = Mock(name=f'w3[{rpc_url}]')
        w3.is_connected.return_value = True
        w3.eth.chain_id = HOME_CHAIN_ID
        w3.eth.get_block.return_value = make_block(100 + len(self.calls))
        self.calls.append(rpc_url)
        self.clients[rpc_url] = w3
        return w3
