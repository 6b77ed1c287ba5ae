"""Pytest configuration.

The modules live at the repository root (flat layout). Make sure the root is
importable even when pytest is run without an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
