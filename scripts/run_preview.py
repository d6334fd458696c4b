#!/usr/bin/env python3
"""
Rotation Preview - Show the weekly doctor rotation and upcoming assignments

Usage:
  python scripts/run_preview.py
  python scripts/run_preview.py --assign 1 --export

Outputs to outputs/ directory when --export is given.
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from clinic_rotation.preview import main

if __name__ == "__main__":
    main()
