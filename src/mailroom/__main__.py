"""``python -m mailroom`` runs the same CLI as the ``mailroom`` script."""

from __future__ import annotations

from .entry import main

if __name__ == "__main__":
    raise SystemExit(main())
