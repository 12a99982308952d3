"""
Entry point for `python -m validator_agent`.
"""

import sys

from validator_agent.cli import main

if __name__ == "__main__":
    sys.exit(main())
