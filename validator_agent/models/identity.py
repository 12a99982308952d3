"""
Validator identity model.
"""

from dataclasses import dataclass, field

from eth_account.signers.local import LocalAccount


@dataclass(frozen=True)
class Identity:
    """The single validator account this process acts for."""
    address: str
    private_key: bytes = field(repr=False)
    account: LocalAccount = field(repr=False, compare=False)
