"""CLI commands for Crypto Tracker.

This package provides the command-line interface for Crypto Tracker,
including market data, chart export, AI analysis and the web server.
"""

from cryptotracker.cli.main import cli, main

__all__ = ["cli", "main"]
