"""
Command line entry point for the validator agent.
"""

import argparse
import logging
import sys
from typing import List, Optional

from validator_agent.application_core import initialize_application
from validator_agent.core.exceptions import ValidatorAgentError, FatalCycleError
from validator_agent.services.poller import Poller

logger = logging.getLogger('validator_agent')


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Validator agent: home chain gated actions and cross-chain block attestations'
    )
    parser.add_argument('--config', help='JSON file with per-section configuration overrides')
    parser.add_argument('--env-file', help='Path to a .env file (default: search from the working directory)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override LOG_LEVEL')
    parser.add_argument('--once', action='store_true', help='Run a single polling cycle and exit')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_arguments(argv)

    try:
        config = initialize_application(config_file=args.config, log_level=args.log_level, env_file=args.env_file)
    except ValidatorAgentError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    poller = Poller(config)

    try:
        poller.initialize()
    except ValidatorAgentError as e:
        logger.error(f"❌ Startup failed: {e}")
        return 1

    try:
        poller.run_forever(max_cycles=1 if args.once else None)
    except FatalCycleError as e:
        logger.error(f"❌ Stopping after fatal cycle error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")

    return 0


if __name__ == '__main__':
    sys.exit(main())
