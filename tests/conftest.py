import os
import sys
from pathlib import Path

# Ensure repository root is on sys.path for `armory` imports without install.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("ARMORY_LOG_LEVEL", "WARN")
