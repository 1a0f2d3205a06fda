"""Entry point for ``python -m docrepo``."""

import sys

from docrepo.cli import main

if __name__ == "__main__":
    sys.exit(main())
