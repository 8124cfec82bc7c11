#!/usr/bin/env python3
"""Direct launcher for the Budget Allocator dashboard.

This script launches Streamlit on ``budget_allocator/dashboard.py`` from the
project root so the package imports resolve.
"""

import sys
import subprocess
import os
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "budget_allocator" / "dashboard.py"

if __name__ == "__main__":
    os.chdir(project_root)
    sys.path.insert(0, str(project_root))
    raise SystemExit(subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path),
    ]).returncode)
