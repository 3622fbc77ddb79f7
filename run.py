# -*- coding: utf-8 -*-
"""
gtranslate Launcher
Runs the CLI straight from a source checkout: python run.py -s en -t de -q '...'
"""

import sys
from pathlib import Path

# Add project root to Python path (for imports)
sys.path.insert(0, str(Path(__file__).resolve().parent))

from gtranslate.cli_main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
