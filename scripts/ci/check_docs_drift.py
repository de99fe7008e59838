#!/usr/bin/env python3
"""Report tracked guides whose upstream polkadot-docs page changed since `docs_commit`.

Writes `has_drift`, `drift_count` and `drift_details` to $GITHUB_OUTPUT.
"""

from __future__ import annotations

import sys

from polkadot_cookbook.cli import check_docs_drift_main


if __name__ == "__main__":
    raise SystemExit(check_docs_drift_main(sys.argv[1:]))
