"""
Validator Agent

Long-running agent for one validator identity: submits the home chain's
gated validator-set and reward-cycle actions when they are due, and relays
signed latest-block attestations for every chain registered in the block
registry contract.

Main Entry Points:
- validator_agent.services.poller: Polling cycle driver
- validator_agent.application_core: Configuration loading and logging setup
- validator_agent.cli: Console entry point
"""

__version__ = "1.0.0"

from .core.config import Config
from .application_core import ApplicationCore, load_config, initialize_application
from .services.context import AgentContext
from .services.poller import Poller, PollerState, CycleReport

__all__ = [
    'Config',
    'ApplicationCore',
    'load_config',
    'initialize_application',
    'AgentContext',
    'Poller',
    'PollerState',
    'CycleReport'
]
