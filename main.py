#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

Drop images into ``images/`` and run:

    python main.py batch

Or use the full CLI:

    python -m nord_dither.cli batch --help
    python -m nord_dither.cli single my_photo.png --noise 0.05
"""

from nord_dither.cli import app

if __name__ == "__main__":
    app()
