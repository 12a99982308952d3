"""
Validator credential loading from an encrypted keystore directory.
"""

import json
import logging
import os
from typing import Optional

from eth_account import Account

from validator_agent.core.config import KeystoreConfig
from validator_agent.core.exceptions import CredentialError
from validator_agent.models.identity import Identity

logger = logging.getLogger(__name__)


def find_keystore_file(keystore_dir: str, prefix: str) -> str:
    """
    Locate the encrypted key file in a keystore directory.

    Args:
        keystore_dir: Directory holding V3 keystore files
        prefix: File name prefix identifying keystore files (e.g. "UTC")

    Returns:
        Path of the first matching file in sorted order

    Raises:
        CredentialError: If the directory is missing or holds no matching file
    """
    if not os.path.isdir(keystore_dir):
        raise CredentialError(f"Keystore directory not found: {keystore_dir}")

    candidates = sorted(name for name in os.listdir(keystore_dir) if name.startswith(prefix))
    if not candidates:
        raise CredentialError(f"No keystore file starting with '{prefix}' in {keystore_dir}")

    if len(candidates) > 1:
        logger.warning(f"Found {len(candidates)} keystore files in {keystore_dir}, using {candidates[0]}")

    return os.path.join(keystore_dir, candidates[0])


def read_password(password_path: str) -> str:
    try:
        with open(password_path, 'r') as f:
            return f.read().strip()
    except OSError as e:
        raise CredentialError(f"Could not read keystore password file {password_path}: {e}") from e


def load_identity(config: Optional[KeystoreConfig] = None) -> Identity:
    """
    Decrypt the validator key and build the process identity.

    Args:
        config: Keystore location settings. If None, uses default config.

    Returns:
        Identity holding the account address and signing key

    Raises:
        CredentialError: On a missing file, unreadable keystore or wrong passphrase
    """
    config = config or KeystoreConfig()
    keystore_file = find_keystore_file(config.keystore_path, config.keystore_prefix)
    password = read_password(config.password_path)

    try:
        with open(keystore_file, 'r') as f:
            keystore = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CredentialError(f"Could not read keystore file {keystore_file}: {e}") from e

    try:
        private_key = Account.decrypt(keystore, password)
    except ValueError as e:
        raise CredentialError(f"Could not decrypt keystore {keystore_file}: {e}") from e

    account = Account.from_key(private_key)
    logger.info(f"🔑 Loaded validator account {account.address}")

    return Identity(address=account.address, private_key=bytes(private_key), account=account)
