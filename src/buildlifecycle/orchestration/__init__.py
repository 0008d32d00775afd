"""
Orchestration of one build's configuration pass and its finish event.
"""

from .session import BuildSession

__all__ = [
    "BuildSession",
]
