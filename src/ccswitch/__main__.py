"""ccswitch executable module.

Delegates to cli.main(); the console script entry point calls the same
function, so error handling lives there.
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
