"""Transparent git wrapper that records a queryable command history."""

__version__ = "0.1.0"

__all__ = ["__version__"]
