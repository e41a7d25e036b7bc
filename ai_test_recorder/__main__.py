"""Allow ``python -m ai_test_recorder``."""

import sys

from .main import cli

if __name__ == "__main__":
    sys.exit(cli())
