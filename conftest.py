"""
Root conftest.py for all tests in the project.

SNES Paint tests are in snes_paint/tests/ with their own conftest.py.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path for imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Qt signals are used without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
