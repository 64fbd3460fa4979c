"""
Package entry point.

Allows running the application via:

    python -m weekendplanner <start-url>

This simply forwards execution to weekendplanner.cli.main().
"""

from weekendplanner.cli import main

if __name__ == "__main__":
    main()
