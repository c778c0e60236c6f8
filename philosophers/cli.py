"""Command-line entry point of the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from philosophers.parsing import ArgumentError, parse_settings
from philosophers.table import Table


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation; return 0 on success and 1 on bad arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_settings(args)
    except ArgumentError as error:
        print(error)
        return 1
    Table(settings, sys.stdout).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())