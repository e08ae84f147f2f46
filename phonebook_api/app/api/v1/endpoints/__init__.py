"""
Endpoint modules for the phone book API.

Each module defines an APIRouter for one entity.  The routers are
aggregated in ``router.py`` one level up.
"""
