import sys
from pathlib import Path

# Put 'src' on sys.path so the tests run against a plain checkout
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))
