"""
Common utilities for the Waves marketing site tooling.

Modules:
- env: environment variable helpers (empty string treated as unset)
- logs: logging setup for command-line entry points
"""

__all__ = [
    "env",
    "logs",
]
