"""
Development runner for the Image Converter GUI.

Runs the application straight from the source tree; pass --api-url to point
it at a conversion service.
"""

import os
import sys

# Make the src packages importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from gui.main import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
