"""
Pydantic models for company data.

Field names are snake_case in Python and camelCase on the wire
(``companyName``, ``registrationDate``, ``personCount``).  The list of
persons belonging to a company is never part of these models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CompanyRead(BaseModel):
    """Schema for reading a company from the API.

    ``person_count`` is computed when companies are listed; a company
    nested inside a person keeps the default of 0.
    """

    id: int
    company_name: str = Field(..., examples=["Writers"])
    registration_date: Optional[datetime] = Field(None, examples=["2024-01-31T12:00:00+00:00"])
    person_count: int = Field(0, examples=[2])

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
