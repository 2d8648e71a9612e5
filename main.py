#!/usr/bin/env python3
"""
AniMate - Main Entry Point

Search anime and browse episodes from the command line.

Usage:
    python main.py search naruto        # Search anime by title
    python main.py episodes 20          # List episodes of anime 20
    python main.py episode 20 1         # Show episode 1 of anime 20
    python main.py --help               # Show this help
"""

import sys
import asyncio
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent))

from animate.main import main  # noqa: E402


if __name__ == "__main__":
    exit_code = asyncio.run(main(sys.argv[1:]))
    sys.exit(exit_code)
