"""
Top-level package for the Phone Book API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
