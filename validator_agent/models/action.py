"""
Gated action and transaction outcome models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class ActionKind(str, Enum):
    """Home chain actions that are only submitted when the chain says they are due."""
    VALIDATOR_SET_CHANGE = 'validator_set_change'
    REWARD_CYCLE = 'reward_cycle'


@dataclass(frozen=True)
class PendingAction:
    """
    The gate's decision for one action kind in one cycle.

    Recomputed every cycle and never cached.
    """
    kind: ActionKind
    due: bool
    contract_method: str
    gas_limit: int
    gas_price: int
    block_number: Optional[int] = None
    cycle_end_block: Optional[int] = None


class OutcomeStatus(str, Enum):
    CONFIRMED = 'confirmed'
    FAILED = 'failed'


@dataclass(frozen=True)
class Outcome:
    """Terminal result of one submitted transaction."""
    status: OutcomeStatus
    label: str
    tx_hash: Optional[str] = None
    reason: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    nonce: Optional[int] = None

    @property
    def confirmed(self) -> bool:
        return self.status is OutcomeStatus.CONFIRMED

    @classmethod
    def success(cls, label: str, tx_hash: str, receipt: Dict[str, Any], nonce: Optional[int] = None) -> 'Outcome':
        return cls(
            status=OutcomeStatus.CONFIRMED,
            label=label,
            tx_hash=tx_hash,
            block_number=receipt.get('blockNumber'),
            gas_used=receipt.get('gasUsed'),
            nonce=nonce,
        )

    @classmethod
    def failure(cls, label: str, reason: str, tx_hash: Optional[str] = None, nonce: Optional[int] = None) -> 'Outcome':
        return cls(status=OutcomeStatus.FAILED, label=label, tx_hash=tx_hash, reason=reason, nonce=nonce)
