"""Crypto Tracker - live crypto charts, scalping bands and AI analysis."""

__version__ = "0.1.0"
