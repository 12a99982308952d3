"""
Poller

Drives one polling cycle after another: initialize once, check that the
account is still an active validator, run the gated home chain actions in
order, then sync registered chains and publish their signed blocks.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from validator_agent.agents.discovery.chain_discovery import ChainDiscoveryAgent
from validator_agent.agents.gate.action_gate import ActionGate
from validator_agent.agents.publish.registry_publisher import RegistryPublisher
from validator_agent.agents.publish.transaction_emitter import TransactionEmitter
from validator_agent.agents.signature.attestation_signer import BlockAttestationSigner
from validator_agent.core.config import Config
from validator_agent.core.exceptions import FatalCycleError, ValidatorAgentError
from validator_agent.models.action import ActionKind, Outcome
from validator_agent.services.context import AgentContext

# Sequential: both actions change consensus state and their order matters
GATED_ACTION_ORDER = (ActionKind.VALIDATOR_SET_CHANGE, ActionKind.REWARD_CYCLE)

# Transport failures reading the registry log; anything else is a bug
SYNC_RPC_ERRORS = (Web3Exception, RequestException, ConnectionError, TimeoutError)


class PollerState(str, Enum):
    IDLE = 'idle'
    INITIALIZING = 'initializing'
    CHECKING_ELIGIBILITY = 'checking_eligibility'
    RUNNING_GATED_ACTIONS = 'running_gated_actions'
    SYNCING_AND_ATTESTING = 'syncing_and_attesting'


@dataclass
class CycleReport:
    """What one polling cycle did."""
    eligible: bool = False
    action_outcomes: Dict[ActionKind, Optional[Outcome]] = field(default_factory=dict)
    attested_chains: List[int] = field(default_factory=list)
    known_chains: List[int] = field(default_factory=list)
    batch_outcome: Optional[Outcome] = None
    sync_error: Optional[str] = None


class Poller:
    """
    Single-task driver loop.

    Cycles never overlap: each runs to completion before the delay to the
    next one starts. Failures the agents anticipate (a reverted transaction,
    an unreachable satellite chain) are absorbed inside the cycle; anything
    else is raised as FatalCycleError.
    """

    def __init__(self,
                 config: Config,
                 context: Optional[AgentContext] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.context = context or AgentContext(config)
        self.sleep = sleep
        self.state = PollerState.IDLE
        self.cycles_completed = 0
        self.logger = logging.getLogger(__name__)

        self.gate = ActionGate(self.context, config)
        self.emitter = TransactionEmitter(self.context, config)
        self.discovery = ChainDiscoveryAgent(self.context, config)
        self.signer = BlockAttestationSigner(self.context, config=config)
        self.publisher = RegistryPublisher(self.context, self.emitter, config)

    def _transition(self, state: PollerState) -> None:
        self.logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state

    def initialize(self) -> None:
        """Run the one-time initialization steps that have not completed yet."""
        if self.context.initialized:
            return
        self._transition(PollerState.INITIALIZING)
        self.context.initialize()

    def is_eligible(self) -> bool:
        account = Web3.to_checksum_address(self.context.account)
        return bool(self.context.consensus.functions.isValidator(account).call())

    def run_gated_action(self, kind: ActionKind) -> Optional[Outcome]:
        """
        Submit one gated action if the chain reports it due.

        Returns:
            The transaction outcome, or None when the action was not due
        """
        action = self.gate.execute(kind)
        if not action.due:
            return None

        return self.emitter.submit(
            self.gate.function_call(action),
            action.contract_method,
            gas_limit=action.gas_limit,
            gas_price=action.gas_price,
        )

    def sync_and_attest(self, report: CycleReport) -> None:
        """
        Sync registered chains, then attest and publish them.

        A failed event read ends this step for the cycle; the next cycle
        replays the registry from block 0 anyway.
        """
        try:
            connections = self.discovery.execute()
        except SYNC_RPC_ERRORS as e:
            self.logger.error(f"❌ Chain sync failed for {self.context.account}, retrying next cycle: {e}")
            report.sync_error = f"{type(e).__name__}: {e}"
            return

        report.known_chains = [chain_id for chain_id, _ in connections]

        attestations = self.signer.execute(connections)
        report.attested_chains = [a.chain_id for a in attestations]
        report.batch_outcome = self.publisher.execute(attestations)

    def run_cycle(self) -> CycleReport:
        """
        Run one full polling cycle.

        Returns:
            CycleReport describing what was submitted

        Raises:
            FatalCycleError: On any failure not absorbed by an agent
        """
        report = CycleReport()
        try:
            self.logger.info(f"Starting polling cycle {self.cycles_completed + 1}")
            self.initialize()

            self._transition(PollerState.CHECKING_ELIGIBILITY)
            report.eligible = self.is_eligible()
            if not report.eligible:
                self.logger.warning(f"{self.context.account} is not a validator, skipping")
                return report

            self._transition(PollerState.RUNNING_GATED_ACTIONS)
            for kind in GATED_ACTION_ORDER:
                report.action_outcomes[kind] = self.run_gated_action(kind)

            self._transition(PollerState.SYNCING_AND_ATTESTING)
            self.sync_and_attest(report)
            return report

        except FatalCycleError:
            raise
        except ValidatorAgentError as e:
            self.logger.error(f"❌ Cycle aborted in state {self.state.value}: {e}")
            raise FatalCycleError(str(e)) from e
        except Exception as e:
            self.logger.exception(f"❌ Unexpected error in state {self.state.value}: {e}")
            raise FatalCycleError(f"{type(e).__name__}: {e}") from e
        finally:
            self._transition(PollerState.IDLE)

    def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """
        Run cycles until stopped, sleeping the polling interval after each.

        Args:
            max_cycles: Stop after this many cycles; None runs indefinitely

        Raises:
            FatalCycleError: When a cycle fails fatally
        """
        interval = self.config.polling.interval_seconds
        while max_cycles is None or self.cycles_completed < max_cycles:
            self.run_cycle()
            self.cycles_completed += 1

            if max_cycles is not None and self.cycles_completed >= max_cycles:
                break
            self.sleep(interval)
