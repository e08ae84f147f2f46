"""
Application package for the phone book service.

``core`` holds configuration, logging, storage and error kinds,
``schemas`` the wire models, ``services`` the data-access layer and
``api`` the HTTP routes that call into it.
"""

from .main import app  # noqa: F401
