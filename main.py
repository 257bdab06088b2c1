"""Local Entry Point - Root Module.

Runs the view from the repository root. It imports from the src package.
"""

from src.main import run

__all__ = [
    "run",
]
