#!/usr/bin/env python3
"""Run every Polymorph verification suite (engine + preview)."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

SUITES = [
    ("engine", ["-m", "not preview"]),
    ("preview", ["-m", "preview"]),
]


def run_suite(name: str, args: list[str]) -> int:
    print(f"=== Running {name} suite ===")
    cmd = [sys.executable, "-m", "pytest", *args]
    proc = subprocess.run(cmd, cwd=PROJECT_ROOT)
    print(f"=== {name} suite exited with {proc.returncode} ===\n")
    return proc.returncode


def main() -> int:
    failures = []
    for name, args in SUITES:
        code = run_suite(name, args)
        # pytest exits 5 when a marker selects nothing.
        if code not in (0, 5):
            failures.append((name, code))

    if failures:
        print("Some suites failed:")
        for name, code in failures:
            print(f" - {name}: exit {code}")
        return 1

    print("All suites passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
