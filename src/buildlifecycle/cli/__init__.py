"""
Command-line interface for the buildlifecycle package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
