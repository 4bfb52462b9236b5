"""
Entry point for ``python -m weekly_availability``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
