"""
Launch the terminal Movie Finder.

Usage:
	python scripts/run_tui.py

Reads TMDB/Appwrite settings from the environment or a .env file.
Set ANALYTICS_BACKEND=memory to run without an Appwrite project.
"""

import sys  # path setup when run as a plain script
from pathlib import Path  # filesystem-safe paths

ROOT = Path(__file__).resolve().parents[1]  # project root
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from moviefinder.tui import main  # noqa: E402


if __name__ == '__main__':
	main()  # start the app
