"""X-Cash command-line tools."""

from .token import cli

__all__ = ["cli"]
