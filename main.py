"""Application entry point for the network monitor."""
from __future__ import annotations

from netmon.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
