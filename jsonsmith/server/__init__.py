"""HTTP API for jsonsmith."""

from jsonsmith.server.app import create_app

__all__ = ["create_app"]
