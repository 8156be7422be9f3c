#!/usr/bin/env python3
"""Run the timelog report from a source checkout."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gitlab_timelogs.cli import main


if __name__ == "__main__":
    main()
