"""Entry point for ``python -m themis_tree``."""

import sys

from themis_tree.cli import main

if __name__ == "__main__":
    sys.exit(main())
