"""
Validator agents.

Each agent wraps one step of the polling cycle and logs under
`agents.<AgentName>`.
"""

from validator_agent.agents.base import BaseAgent
from validator_agent.agents.gate.action_gate import ActionGate
from validator_agent.agents.publish.transaction_emitter import TransactionEmitter
from validator_agent.agents.publish.registry_publisher import RegistryPublisher
from validator_agent.agents.discovery.chain_discovery import ChainDiscoveryAgent
from validator_agent.agents.signature.attestation_signer import BlockAttestationSigner

__all__ = [
    'BaseAgent',
    'ActionGate',
    'TransactionEmitter',
    'RegistryPublisher',
    'ChainDiscoveryAgent',
    'BlockAttestationSigner'
]
