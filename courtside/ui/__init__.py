"""
UI package for the Courtside substitution tracker.

This package contains the Flask JSON server.
"""
from .web_app import create_app, run_web_app

__all__ = ["create_app", "run_web_app"]
