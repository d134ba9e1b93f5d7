"""Gulita - health tracking backend.

User accounts with JWT sessions, diabetes risk check history and a
health blog, served over a REST API.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
