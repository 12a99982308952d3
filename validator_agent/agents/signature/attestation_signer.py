"""
Block attestation signing for the home chain and satellite chains.

Each chain role has its own strategy: satellites sign a plain header digest,
the home chain also commits to the current validator set and cycle end block.
The signer picks the strategy from the connection's role, never from the
chain id itself.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from eth_abi import encode
from eth_account.messages import encode_defunct
from web3 import Web3

from validator_agent.agents.base import BaseAgent
from validator_agent.agents.signature.block_header import encode_header
from validator_agent.core.config import Config
from validator_agent.core.exceptions import AttestationError
from validator_agent.models.attestation import BlockAttestation, HomeBlockAttestation
from validator_agent.models.chain import ChainConnection, ChainRole


def sign_digest(signer, digest: bytes) -> bytes:
    """EIP-191 personal-message signature over a 32 byte digest."""
    return bytes(signer.sign_message(encode_defunct(primitive=digest)).signature)


def satellite_digest(block_hash: bytes, chain_id: int, rlp_header: bytes) -> bytes:
    return bytes(Web3.keccak(encode(['bytes32', 'uint256', 'bytes'], [block_hash, chain_id, rlp_header])))


def home_digest(block_hash: bytes,
                chain_id: int,
                rlp_header: bytes,
                cycle_end_block: int,
                validators: Iterable[str]) -> bytes:
    return bytes(Web3.keccak(encode(
        ['bytes32', 'uint256', 'bytes', 'uint256', 'address[]'],
        [block_hash, chain_id, rlp_header, cycle_end_block, list(validators)],
    )))


class AttestationStrategy(ABC):
    """Builds the signed attestation for one chain role."""

    role: ChainRole

    @abstractmethod
    def build(self, connection: ChainConnection, block: Mapping[str, Any]) -> BlockAttestation:
        pass


class SatelliteAttestationStrategy(AttestationStrategy):
    role = ChainRole.SATELLITE

    def build(self, connection: ChainConnection, block: Mapping[str, Any]) -> BlockAttestation:
        block_hash = bytes(block['hash'])
        rlp_header = encode_header(block)
        signature = sign_digest(connection.signer, satellite_digest(block_hash, connection.chain_id, rlp_header))
        return BlockAttestation(
            chain_id=connection.chain_id,
            block_number=int(block['number']),
            block_hash=block_hash,
            rlp_header=rlp_header,
            signature=signature,
        )


class HomeChainAttestationStrategy(AttestationStrategy):
    """
    Home chain attestation with validator set snapshot.

    Reads the consensus contract for the current cycle end block and every
    validator by position, so the snapshot keeps the contract's ordering.
    """

    role = ChainRole.HOME

    def __init__(self, context):
        self.context = context

    def validator_snapshot(self) -> Tuple[str, ...]:
        functions = self.context.consensus.functions
        count = int(functions.currentValidatorsLength().call())
        return tuple(functions.currentValidatorsAtPosition(i).call() for i in range(count))

    def build(self, connection: ChainConnection, block: Mapping[str, Any]) -> BlockAttestation:
        cycle_end_block = int(self.context.consensus.functions.getCurrentCycleEndBlock().call())
        validators = self.validator_snapshot()
        if not validators:
            raise AttestationError(connection.chain_id, "consensus contract reports an empty validator set")

        block_hash = bytes(block['hash'])
        rlp_header = encode_header(block)
        digest = home_digest(block_hash, connection.chain_id, rlp_header, cycle_end_block, validators)
        return HomeBlockAttestation(
            chain_id=connection.chain_id,
            block_number=int(block['number']),
            block_hash=block_hash,
            rlp_header=rlp_header,
            signature=sign_digest(connection.signer, digest),
            cycle_end_block=cycle_end_block,
            validators=validators,
        )


class BlockAttestationSigner(BaseAgent):
    """
    Produces signed attestations of every known chain's latest block.

    Chains are attested concurrently and independently: a chain whose block
    cannot be fetched or signed is logged and left out of the batch.
    """

    def __init__(self,
                 context,
                 strategies: Optional[Dict[ChainRole, AttestationStrategy]] = None,
                 config: Optional[Config] = None):
        super().__init__(config or context.config, "BlockAttestationSigner")
        self.context = context
        self.strategies = strategies or {
            ChainRole.HOME: HomeChainAttestationStrategy(context),
            ChainRole.SATELLITE: SatelliteAttestationStrategy(),
        }

    def strategy_for(self, role: ChainRole) -> AttestationStrategy:
        try:
            return self.strategies[role]
        except KeyError:
            raise ValueError(f"No attestation strategy for chain role {role!r}")

    def attest(self, chain_id: int, connection: ChainConnection) -> BlockAttestation:
        """
        Sign the latest block of one chain.

        Args:
            chain_id: Chain identifier
            connection: Live connection for that chain

        Returns:
            The signed attestation
        """
        strategy = self.strategy_for(connection.role)
        block = connection.w3.eth.get_block('latest')
        attestation = strategy.build(connection, block)
        self.logger.debug(f"Signed {connection.role.value} chain {chain_id} block #{attestation.block_number}")
        return attestation

    def attest_all(self, connections: List[Tuple[int, ChainConnection]]) -> List[BlockAttestation]:
        """
        Attest every chain in parallel, dropping the ones that fail.

        Args:
            connections: (chain id, connection) pairs from the current sync

        Returns:
            Successful attestations ordered by chain id
        """
        if not connections:
            return []

        attestations: List[BlockAttestation] = []
        max_workers = min(self.config.polling.max_concurrent_chains, len(connections))

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_chain = {
                executor.submit(self.attest, chain_id, connection): chain_id
                for chain_id, connection in connections
            }

            for future in as_completed(future_to_chain):
                chain_id = future_to_chain[future]
                try:
                    attestations.append(future.result())
                except Exception as e:
                    self.logger.error(f"❌ Failed to attest chain {chain_id} for {self.context.account}: {e}")

        attestations.sort(key=lambda a: a.chain_id)
        self.logger.info(f"✍️ Signed {len(attestations)}/{len(connections)} chains")
        return attestations

    def run(self, connections: List[Tuple[int, ChainConnection]]) -> List[BlockAttestation]:
        return self.attest_all(connections)
