"""
Top-level router for version 1 of the API.

Aggregates the company and person routers.  The application mounts
this router below ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import companies, persons

router = APIRouter()

router.include_router(companies.router, prefix="/Company", tags=["companies"])
router.include_router(persons.router, prefix="/Person", tags=["persons"])
