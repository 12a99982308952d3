"""
Signed block attestation models.

The registry contract accepts a list of `SignedBlock` tuples:

    (bytes32 blockHash, uint256 chainId, bytes rlpHeader, bytes signature,
     uint256 cycleEnd, address[] validators)

Only home chain attestations carry a cycle end and a validator snapshot, so
that metadata lives on `HomeBlockAttestation` alone.
"""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class BlockAttestation:
    """A signed statement about one chain's latest block header."""
    chain_id: int
    block_number: int
    block_hash: bytes
    rlp_header: bytes
    signature: bytes

    def to_contract_args(self) -> Tuple:
        return (self.block_hash, self.chain_id, self.rlp_header, self.signature, 0, [])


@dataclass(frozen=True)
class HomeBlockAttestation(BlockAttestation):
    """Home chain attestation carrying the validator set and cycle end block."""
    cycle_end_block: int = 0
    validators: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.validators:
            raise ValueError(f"home chain {self.chain_id} attestation requires a validator snapshot")

    def to_contract_args(self) -> Tuple:
        return (
            self.block_hash,
            self.chain_id,
            self.rlp_header,
            self.signature,
            self.cycle_end_block,
            list(self.validators),
        )


def to_registry_batch(attestations: List[BlockAttestation]) -> List[Tuple]:
    """Encode attestations as the argument of `addSignedBlocks`."""
    return [attestation.to_contract_args() for attestation in attestations]
