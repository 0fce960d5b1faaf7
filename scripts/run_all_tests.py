#!/usr/bin/env python3
"""
Run all tests in tests/.
Usage: from project root:
  python scripts/run_all_tests.py [extra pytest args]
  or: pytest tests/ -v
"""
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def main():
    tests_dir = PROJECT_ROOT / "tests"
    pythonpath = os.pathsep.join([str(PROJECT_ROOT / "src"), str(PROJECT_ROOT)])
    env = {**os.environ, "PYTHONPATH": pythonpath, "DATABASE_URL": "sqlite://"}
    cmd = [sys.executable, "-m", "pytest", str(tests_dir), "-v", "--tb=short", *sys.argv[1:]]
    result = subprocess.run(cmd, cwd=str(PROJECT_ROOT), env=env)
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
