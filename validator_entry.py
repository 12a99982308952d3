"""
Console script entry point for the validator agent.
"""

import sys


def main():
    """Entry point for the validator-agent console script."""
    from validator_agent.cli import main as main_func
    sys.exit(main_func())


if __name__ == "__main__":
    main()
