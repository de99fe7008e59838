#!/usr/bin/env python3
"""Sync versions.yml from the polkadot-docs upstream variables.yml.

Only updates a pin when upstream is strictly newer; never downgrades.
Writes `has_updates` and `changelog` to $GITHUB_OUTPUT.
"""

from __future__ import annotations

import sys

from polkadot_cookbook.cli import sync_versions_main


if __name__ == "__main__":
    raise SystemExit(sync_versions_main(sys.argv[1:]))
