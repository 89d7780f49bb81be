"""
Top‑level package for the Reference Values API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
