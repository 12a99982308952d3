"""
Chain connection models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from eth_account.signers.local import LocalAccount


class ChainRole(str, Enum):
    """How a chain's attestations are built."""
    HOME = 'home'
    SATELLITE = 'satellite'


@dataclass
class ChainConnection:
    """
    Live connection to one chain.

    Owned by the ChainConnectionRegistry; the registry is the only writer of
    `rpc_endpoint` and `w3`. Everything else treats the record as read-only.
    """
    chain_id: int
    rpc_endpoint: str
    role: ChainRole
    account: str
    signer: LocalAccount = field(repr=False)
    w3: Any = field(repr=False)

    @property
    def is_home(self) -> bool:
        return self.role is ChainRole.HOME
