"""
Build a signature PDF from ``{title}-{n}.txt`` chapter files.
"""

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bookpress.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
