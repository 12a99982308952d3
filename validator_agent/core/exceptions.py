"""
Exception hierarchy for the validator agent.

Startup errors (configuration, credentials, home chain provider) abort the
process. Attestation errors are absorbed per chain. FatalCycleError wraps
anything a polling cycle did not anticipate.
"""


class ValidatorAgentError(Exception):
    """Base class for all validator agent errors"""
    pass


class ConfigurationError(ValidatorAgentError):
    """Raised when required configuration is missing or invalid"""
    pass


class CredentialError(ValidatorAgentError):
    """Raised when the validator signing key cannot be loaded"""
    pass


class ChainConnectionError(ValidatorAgentError):
    """Raised when a chain provider cannot be constructed or reached"""
    pass


class AttestationError(ValidatorAgentError):
    """Raised when a block attestation cannot be built for one chain"""

    def __init__(self, chain_id: int, message: str):
        super().__init__(f"chain {chain_id}: {message}")
        self.chain_id = chain_id


class FatalCycleError(ValidatorAgentError):
    """Raised when a polling cycle fails in a way that must stop the process"""
    pass
