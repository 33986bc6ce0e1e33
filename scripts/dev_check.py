#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys

CHECKS = [
    [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"],
    # smoke: a search-path group and a template group through the CLI
    [sys.executable, "-m", "app.albumgrid.main", *("--ratio 1 " * 5).split()],
    [sys.executable, "-m", "app.albumgrid.main", "--ratio", "0.5", "--ratio", "1", "--ratio", "1", "--avatar"],
]


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    for cmd in CHECKS:
        code = run(cmd)
        if code != 0:
            print("\n❌ dev_check failed")
            return code

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
