"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .args import ArgumentError, parse_args
from .table import Table


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation; return 1 on bad arguments or starvation, else 0."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(list(argv))
    except ArgumentError:
        print("Error")
        return 1
    starved = Table(settings).run()
    return 1 if starved else 0


if __name__ == "__main__":
    sys.exit(main())