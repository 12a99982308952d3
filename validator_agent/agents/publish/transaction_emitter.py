"""
Transaction emitter for home chain contract calls.
"""

from typing import Optional

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, TransactionNotFound

from validator_agent.agents.base import BaseAgent
from validator_agent.core.config import Config
from validator_agent.models.action import Outcome


class TransactionEmitter(BaseAgent):
    """
    Submits one contract call as a signed transaction and waits for it.

    The lifecycle is: nonce fetched → transaction hash assigned → first
    receipt (confirmed) or error (failed). Every failure is logged and
    returned as a failed Outcome; nothing is raised and nothing is retried
    within the cycle.
    """

    def __init__(self, context, config: Optional[Config] = None):
        super().__init__(config or context.config, "TransactionEmitter")
        self.context = context

    def get_nonce(self) -> int:
        """Transaction count of the validator account, including pending transactions."""
        account = self.context.account
        self.logger.debug(f"getNonce for {account}")
        nonce = self.context.home_w3.eth.get_transaction_count(account, 'pending')
        self.logger.debug(f"transactionCount for {account} is {nonce}")
        return nonce

    def submit(self,
               function_call,
               label: str,
               gas_limit: Optional[int] = None,
               gas_price: Optional[int] = None) -> Outcome:
        """
        Sign, send and await a contract function call.

        Args:
            function_call: Bound contract function (e.g. `contract.functions.emitInitiateChange()`)
            label: Name used in log lines and on the returned Outcome
            gas_limit: Gas limit override; defaults to the configured limit
            gas_price: Gas price override in wei; defaults to the configured price

        Returns:
            Outcome of the transaction
        """
        account = self.context.account
        tx_settings = self.config.transactions
        nonce = None
        tx_hash = None

        try:
            nonce = self.get_nonce()

            transaction = function_call.build_transaction({
                'from': account,
                'nonce': nonce,
                'gas': gas_limit if gas_limit is not None else tx_settings.gas_limit,
                'gasPrice': gas_price if gas_price is not None else tx_settings.gas_price,
            })

            self.logger.info(f"{account} sending {label} transaction (nonce {nonce})")
            signed = self.context.identity.account.sign_transaction(transaction)
            tx_hash = Web3.to_hex(self.context.home_w3.eth.send_raw_transaction(signed.raw_transaction))
            self.logger.info(f"transactionHash: {tx_hash}")

            receipt = self.context.home_w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=tx_settings.receipt_timeout,
                poll_latency=tx_settings.poll_latency,
            )
            self.logger.debug(f"receipt: {dict(receipt)}")

            if receipt['status'] == 0:
                self.logger.error(f"❌ {label} transaction {tx_hash} from {account} reverted")
                return Outcome.failure(label, 'transaction reverted', tx_hash=tx_hash, nonce=nonce)

            self.logger.info(f"✅ {label} confirmed in block {receipt['blockNumber']}")
            return Outcome.success(label, tx_hash, receipt, nonce=nonce)

        except ContractLogicError as e:
            return self._failed(label, f"contract error: {e}", tx_hash, nonce)
        except TimeExhausted as e:
            return self._failed(label, f"no receipt before timeout: {e}", tx_hash, nonce)
        except TransactionNotFound as e:
            return self._failed(label, f"transaction not found: {e}", tx_hash, nonce)
        except Exception as e:
            return self._failed(label, f"{type(e).__name__}: {e}", tx_hash, nonce)

    def _failed(self, label: str, reason: str, tx_hash: Optional[str], nonce: Optional[int]) -> Outcome:
        self.logger.error(f"❌ {label} from {self.context.account} failed: {reason}")
        return Outcome.failure(label, reason, tx_hash=tx_hash, nonce=nonce)

    def run(self, function_call, label: str, **kwargs) -> Outcome:
        return self.submit(function_call, label, **kwargs)
