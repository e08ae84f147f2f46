"""
Version 1 of the phone book API.

The routes keep the paths existing phone book clients call
(``/Company/...`` and ``/Person/...``).
"""
