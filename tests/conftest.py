import os
import sys
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
# Windows in tests never reach a real screen
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

# Ensure the repo root is on sys.path for test imports without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
