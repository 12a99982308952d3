"""
Configuration management for the validator agent.
"""

import os
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field

from web3 import Web3


@dataclass
class ChainConfig:
    """Home chain connection settings."""
    rpc_url: str = field(default_factory=lambda: os.getenv('RPC', 'https://rpc.fuse.io'))
    home_chain_id: int = field(default_factory=lambda: int(os.getenv('HOME_CHAIN_ID', '122')))
    rpc_timeout: int = field(default_factory=lambda: int(os.getenv('RPC_TIMEOUT', '30')))


@dataclass
class ContractConfig:
    """Addresses of the home chain contracts the agent drives."""
    consensus_address: Optional[str] = field(default_factory=lambda: os.getenv('CONSENSUS_ADDRESS'))
    block_reward_address: Optional[str] = field(default_factory=lambda: os.getenv('BLOCK_REWARD_ADDRESS'))
    block_registry_address: Optional[str] = field(default_factory=lambda: os.getenv('BLOCK_REGISTRY_ADDRESS'))
    abi_dir: Optional[str] = field(default_factory=lambda: os.getenv('ABI_DIR'))


@dataclass
class TransactionConfig:
    """Gas and confirmation settings for submitted transactions."""
    gas_limit: int = field(default_factory=lambda: int(os.getenv('GAS', '1000000')))
    gas_price: int = field(default_factory=lambda: int(os.getenv('GAS_PRICE', '0')))
    receipt_timeout: float = field(default_factory=lambda: float(os.getenv('TX_RECEIPT_TIMEOUT', '120')))
    poll_latency: float = field(default_factory=lambda: float(os.getenv('TX_POLL_LATENCY', '0.5')))


@dataclass
class PollingConfig:
    """Driver loop settings."""
    interval_ms: int = field(default_factory=lambda: int(os.getenv('POLLING_INTERVAL', '2500')))
    max_concurrent_chains: int = field(default_factory=lambda: int(os.getenv('MAX_CONCURRENT_CHAINS', '8')))

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0


@dataclass
class KeystoreConfig:
    """Location of the encrypted validator key and its passphrase."""
    config_dir: str = field(default_factory=lambda: os.getenv('CONFIG_DIR', 'config/'))
    keystore_dir: str = field(default_factory=lambda: os.getenv('KEYSTORE_DIR', 'keys/FuseNetwork'))
    keystore_prefix: str = field(default_factory=lambda: os.getenv('KEYSTORE_PREFIX', 'UTC'))
    password_file: str = field(default_factory=lambda: os.getenv('PASSWORD_FILE', 'pass.pwd'))

    @property
    def keystore_path(self) -> str:
        return os.path.join(self.config_dir, self.keystore_dir)

    @property
    def password_path(self) -> str:
        return os.path.join(self.config_dir, self.password_file)


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO'))
    format: str = field(default_factory=lambda: os.getenv('LOG_FORMAT', '%(asctime)s %(levelname)s [%(name)s]: %(message)s'))
    quiet_libraries: bool = field(default_factory=lambda: os.getenv('QUIET_LIBRARY_LOGS', 'true').lower() == 'true')


class Config:
    """
    Main configuration class that aggregates all configuration settings.

    Every section reads its defaults from the environment when constructed,
    so a `Config()` built after `load_dotenv()` reflects the `.env` file.
    """

    def __init__(self, config_overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration with optional overrides.

        Args:
            config_overrides: Dictionary of per-section configuration overrides
        """
        self.chain = ChainConfig()
        self.contracts = ContractConfig()
        self.transactions = TransactionConfig()
        self.polling = PollingConfig()
        self.keystore = KeystoreConfig()
        self.logging = LoggingConfig()

        if config_overrides:
            self._apply_overrides(config_overrides)

    def _apply_overrides(self, overrides: Dict[str, Any]) -> None:
        """Apply configuration overrides."""
        for section, values in overrides.items():
            if hasattr(self, section) and isinstance(values, dict):
                section_config = getattr(self, section)
                for key, value in values.items():
                    if hasattr(section_config, key):
                        setattr(section_config, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'chain': dict(self.chain.__dict__),
            'contracts': dict(self.contracts.__dict__),
            'transactions': dict(self.transactions.__dict__),
            'polling': dict(self.polling.__dict__),
            'keystore': dict(self.keystore.__dict__),
            'logging': dict(self.logging.__dict__),
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create configuration from dictionary."""
        return cls(config_overrides=config_dict)

    def missing_contract_addresses(self) -> List[str]:
        """Names of the contract address settings that are unset or malformed."""
        missing = []
        for name in ('consensus_address', 'block_reward_address', 'block_registry_address'):
            value = getattr(self.contracts, name)
            if not value or not Web3.is_address(value):
                missing.append(name)
        return missing

    def validate(self) -> bool:
        """
        Validate configuration settings.

        Returns:
            True if configuration is valid, False otherwise
        """
        if self.missing_contract_addresses():
            return False
        if self.polling.interval_ms < 0:
            return False
        if self.polling.max_concurrent_chains <= 0:
            return False
        if self.transactions.gas_limit <= 0 or self.transactions.gas_price < 0:
            return False
        if self.transactions.receipt_timeout <= 0:
            return False

        return True
