"""Entry point for the Hadith Export application."""

import sys

from hadith_export.cli import main

if __name__ == "__main__":
    sys.exit(main())
