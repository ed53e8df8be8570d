"""Main entry point for ``python -m termtop``."""

import sys

from termtop.app import main


def run() -> int:
    """Run termtop and translate interrupts into an exit code."""
    try:
        main()
        return 0
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(run())
