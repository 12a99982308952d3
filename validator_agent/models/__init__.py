"""
Models package for the validator agent.
"""

from validator_agent.models.identity import Identity
from validator_agent.models.chain import ChainRole, ChainConnection
from validator_agent.models.action import (
    ActionKind,
    PendingAction,
    Outcome,
    OutcomeStatus
)
from validator_agent.models.attestation import (
    BlockAttestation,
    HomeBlockAttestation,
    to_registry_batch
)

__all__ = [
    'Identity',
    'ChainRole',
    'ChainConnection',
    'ActionKind',
    'PendingAction',
    'Outcome',
    'OutcomeStatus',
    'BlockAttestation',
    'HomeBlockAttestation',
    'to_registry_batch'
]
