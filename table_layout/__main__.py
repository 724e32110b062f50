"""Package entry point for ``python -m table_layout``.

RULES:
- Delegates to cli.main() and exits with its return code
"""

import sys

from table_layout.cli import main

if __name__ == "__main__":
    sys.exit(main())
