"""Aggregate application use cases."""

from .notifications import build_dispatch_engine, build_release_scanner

__all__ = [
    "build_dispatch_engine",
    "build_release_scanner",
]
