#!/usr/bin/env python3
"""
Main entry point for the Courtside web application.

This script launches the Flask-based JSON server. Settings come from the
COURTSIDE_* environment variables (see courtside/config.py).
"""
from courtside.ui.web_app import run_web_app

if __name__ == "__main__":
    run_web_app()
