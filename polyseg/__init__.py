"""Polymorphic collections with per-type segments and segment-aware algorithms."""

__version__ = "0.1.0"
__all__ = ["__version__"]