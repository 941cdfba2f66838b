"""Utility helpers package."""

from codelang.utils.cache import CacheBackend, cache_backend, build_cache_key

__all__ = ["CacheBackend", "cache_backend", "build_cache_key"]
