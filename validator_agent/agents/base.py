"""
Shared lifecycle for the agents that make up one polling cycle.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging
from datetime import datetime, timezone

from validator_agent.core.config import Config


class BaseAgent(ABC):
    """
    One step of the polling cycle.

    Subclasses implement `run`; the Poller calls `execute`, which times the
    step and logs failures before re-raising them.
    """

    def __init__(self, config: Optional[Config] = None, agent_name: Optional[str] = None):
        """
        Args:
            config: Settings shared with the rest of the process; a fresh
                `Config()` is read from the environment when omitted
            agent_name: Logger suffix, defaulting to the class name
        """
        self.config = config or Config()
        self.agent_name = agent_name or self.__class__.__name__
        self.logger = self._setup_logger()
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        return logging.getLogger(f"agents.{self.agent_name}")

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Perform this agent's step and return its result."""
        pass

    def pre_run_hook(self) -> None:
        self.start_time = datetime.now(timezone.utc)
        self.logger.debug(f"🚀 Starting {self.agent_name}")

    def post_run_hook(self, result: Any) -> None:
        self.end_time = datetime.now(timezone.utc)
        duration = (self.end_time - self.start_time).total_seconds() if self.start_time else 0
        self.logger.debug(f"✅ Completed {self.agent_name} in {duration:.2f}s")

    def execute(self, *args, **kwargs) -> Any:
        """
        Run the step between the timing hooks.

        Exceptions are logged under the agent's name and propagate unchanged,
        so the caller decides whether they end the cycle.
        """
        try:
            self.pre_run_hook()
            result = self.run(*args, **kwargs)
            self.post_run_hook(result)
            return result
        except Exception as e:
            self.logger.error(f"❌ Error in {self.agent_name}: {e}")
            raise

    def get_execution_stats(self) -> Dict[str, Any]:
        """Timing of the most recent `execute` call."""
        return {
            "agent_name": self.agent_name,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_seconds": (
                (self.end_time - self.start_time).total_seconds()
                if self.start_time and self.end_time else None
            )
        }
