"""
Core Application Module

Provides configuration loading and environment setup for the validator agent,
independent of CLI concerns.
"""

import json
import os
from typing import Optional

from dotenv import load_dotenv

from validator_agent.core.config import Config
from validator_agent.core.exceptions import ConfigurationError
from validator_agent.core.logging import setup_logging


class ApplicationCore:
    """
    Core application manager for the validator agent.

    Loads `.env` values, an optional JSON file of per-section overrides and a
    log level override, in that order of increasing precedence.
    """

    def load_config(self,
                    config_file: Optional[str] = None,
                    log_level: Optional[str] = None,
                    env_file: Optional[str] = None) -> Config:
        """
        Load configuration from file and environment.

        Args:
            config_file: Explicit path to a JSON config file
            log_level: Override log level
            env_file: Explicit `.env` path; defaults to searching from the cwd

        Returns:
            Configuration instance

        Raises:
            ConfigurationError: If an explicit config file is missing or the
                resulting configuration is invalid
        """
        load_dotenv(env_file)

        config = Config()
        target_config_file = config_file or 'config.json'

        if os.path.exists(target_config_file):
            try:
                with open(target_config_file, 'r') as f:
                    config = Config(config_overrides=json.load(f))
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid config file {target_config_file}: {e}") from e
        elif config_file:
            raise ConfigurationError(f"Config file not found: {config_file}")

        if log_level:
            config.logging.level = log_level

        if not config.validate():
            missing = config.missing_contract_addresses()
            detail = f"missing or invalid: {', '.join(missing)}" if missing else "check gas and polling settings"
            raise ConfigurationError(f"Invalid configuration ({detail})")

        return config

    def setup_environment(self, config: Config) -> None:
        """Configure process-wide logging."""
        setup_logging(config.logging)

    def initialize_application(self,
                               config_file: Optional[str] = None,
                               log_level: Optional[str] = None,
                               env_file: Optional[str] = None) -> Config:
        """Load configuration and set up logging in one step."""
        config = self.load_config(config_file=config_file, log_level=log_level, env_file=env_file)
        self.setup_environment(config)
        return config


def load_config(config_file: Optional[str] = None,
                log_level: Optional[str] = None,
                env_file: Optional[str] = None) -> Config:
    """Convenience function to load configuration."""
    return ApplicationCore().load_config(config_file, log_level, env_file)


def initialize_application(config_file: Optional[str] = None,
                           log_level: Optional[str] = None,
                           env_file: Optional[str] = None) -> Config:
    """Convenience function for complete application initialization."""
    return ApplicationCore().initialize_application(config_file, log_level, env_file)
