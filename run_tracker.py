#!/usr/bin/env python3
"""Direct launcher for the Allowance Tracker dashboard.

This script launches Streamlit on ``allowance_tracker/dashboard.py`` with the
project root as the working directory, so the default ``data/`` directory
resolves next to the package.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()

if __name__ == "__main__":
    os.chdir(project_root)
    sys.path.insert(0, str(project_root))
    raise SystemExit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(project_root / "allowance_tracker" / "dashboard.py"),
    ]).returncode)
