"""Mini README: Interactive interfaces for the month budget tracker.

Exports the FastAPI application factory serving the JSON interface. The
Typer CLI lives in ``main_budget_centre.py`` at the repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
