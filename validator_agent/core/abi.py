"""
Contract ABI loading.

The package ships minimal ABIs for the consensus, block reward and block
registry contracts under `validator_agent/abi/`. Deployments with richer ABIs
can point `ABI_DIR` at a directory holding files with the same names.
"""

import json
import logging
import os
from typing import Dict, List, Optional

from validator_agent.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PACKAGED_ABI_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'abi')

CONSENSUS_ABI = 'consensus'
BLOCK_REWARD_ABI = 'blockReward'
BLOCK_REGISTRY_ABI = 'blockRegistry'


def load_abi(name: str, abi_dir: Optional[str] = None) -> List[Dict]:
    """
    Load a contract ABI by name.

    Args:
        name: ABI file name without the `.json` suffix
        abi_dir: Optional directory searched before the packaged ABIs

    Returns:
        The ABI as a list of entries

    Raises:
        ConfigurationError: If no ABI file exists or the file is not a JSON list
    """
    search_dirs = [d for d in (abi_dir, PACKAGED_ABI_DIR) if d]

    for directory in search_dirs:
        abi_path = os.path.join(directory, f"{name}.json")
        if not os.path.exists(abi_path):
            continue

        logger.debug(f"Loading ABI from: {abi_path}")
        try:
            with open(abi_path, 'r') as f:
                abi = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid ABI file {abi_path}: {e}") from e

        if not isinstance(abi, list):
            raise ConfigurationError(f"ABI file {abi_path} must contain a JSON list")
        return abi

    raise ConfigurationError(f"ABI '{name}' not found in {', '.join(search_dirs)}")
