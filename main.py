#!/usr/bin/env python3
"""
VimpyType - Quick launcher.

This is a convenience wrapper around the CLI.

Usage:
    python main.py             # Show available commands
    python main.py lesson      # Start a lesson
    python main.py drill -d medium
"""

from vimpytype.cli.main import run

if __name__ == "__main__":
    run()
