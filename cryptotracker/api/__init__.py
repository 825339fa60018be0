"""HTTP API for Crypto Tracker."""

from cryptotracker.api.app import create_app, market_payload

__all__ = ["create_app", "market_payload"]
