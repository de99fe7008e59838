#!/usr/bin/env python3
"""Print the tool versions a tutorial or recipe builds against.

Reads $TUTORIAL_DIR / $TUTORIAL_KEY when the matching flags are omitted.
"""

from __future__ import annotations

import sys

from polkadot_cookbook.cli import load_versions_main


if __name__ == "__main__":
    raise SystemExit(load_versions_main(sys.argv[1:]))
