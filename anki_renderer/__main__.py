"""Entry point for running anki_renderer as a module.

Usage:
    python -m anki_renderer <command> [options]
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
