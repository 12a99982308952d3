"""
Action gate deciding whether a home chain action is due.
"""

from typing import Optional, Dict, NamedTuple

from validator_agent.agents.base import BaseAgent
from validator_agent.core.config import Config
from validator_agent.models.action import ActionKind, PendingAction


class GatedActionSpec(NamedTuple):
    contract_attr: str
    predicate: str
    method: str


GATED_ACTIONS: Dict[ActionKind, GatedActionSpec] = {
    ActionKind.VALIDATOR_SET_CHANGE: GatedActionSpec('consensus', 'shouldEmitInitiateChange', 'emitInitiateChange'),
    ActionKind.REWARD_CYCLE: GatedActionSpec('block_reward', 'shouldEmitRewardedOnCycle', 'emitRewardedOnCycle'),
}


class ActionGate(BaseAgent):
    """
    Reads the home chain's should-emit predicates.

    Every call reads fresh chain state; other validators can flip a predicate
    between cycles, so nothing is cached. Read failures propagate to the
    caller.
    """

    def __init__(self, context, config: Optional[Config] = None):
        super().__init__(config or context.config, "ActionGate")
        self.context = context

    def evaluate(self, kind: ActionKind) -> PendingAction:
        """
        Read the current due flag for an action kind.

        Args:
            kind: Which gated action to evaluate

        Returns:
            PendingAction carrying the flag verbatim plus the method and gas
            parameters to submit it with
        """
        spec = GATED_ACTIONS[kind]
        contract = getattr(self.context, spec.contract_attr)

        block_number = self.context.home_w3.eth.block_number
        cycle_end_block = int(self.context.consensus.functions.getCurrentCycleEndBlock().call())
        due = bool(getattr(contract.functions, spec.predicate)().call())

        self.logger.info(
            f"{kind.value}: block #{block_number} currentCycleEndBlock: {cycle_end_block} "
            f"{spec.predicate}: {due}"
        )

        return PendingAction(
            kind=kind,
            due=due,
            contract_method=spec.method,
            gas_limit=self.config.transactions.gas_limit,
            gas_price=self.config.transactions.gas_price,
            block_number=block_number,
            cycle_end_block=cycle_end_block,
        )

    def check_due(self, kind: ActionKind) -> bool:
        return self.evaluate(kind).due

    def function_call(self, action: PendingAction):
        """Contract function call that performs a due action."""
        contract = getattr(self.context, GATED_ACTIONS[action.kind].contract_attr)
        return getattr(contract.functions, action.contract_method)()

    def run(self, kind: ActionKind) -> PendingAction:
        return self.evaluate(kind)
