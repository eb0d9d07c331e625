"""Allow ``python -m srcfmt``."""

import sys

from srcfmt.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
