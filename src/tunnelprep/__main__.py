"""CLI entry point for tunnelprep.

Usage:
    python -m tunnelprep                  # interactive prompts
    python -m tunnelprep --help
"""

from __future__ import annotations

import sys

from tunnelprep.setup_wizard import run_wizard


def main() -> None:
    sys.exit(run_wizard())


if __name__ == "__main__":
    main()
