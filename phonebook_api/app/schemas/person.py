"""
Pydantic models for person data.

``PersonRead`` is what every person endpoint returns.  ``PersonUpdate``
is the body accepted by ``POST /Person/Update``; it has the same shape
as ``PersonRead`` so a client can send back a record it received,
edited in place.  Length limits are checked by the service layer, not
here, so records that are already stored can always be read.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .company import CompanyRead


CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class PersonBase(BaseModel):
    full_name: str = Field(..., examples=["William Shakespeare"])
    phone_number: Optional[str] = Field(None, examples=["1234567890"])
    address: Optional[str] = Field(None, examples=["Street 1"])

    model_config = CAMEL_CONFIG


class PersonRead(PersonBase):
    """Schema for reading a person from the API."""

    id: int
    company_id: int
    company: Optional[CompanyRead] = None


class CompanyRef(BaseModel):
    """Company nested in an update body; only ``id`` is read.

    Anything else a client echoes back (``companyName``,
    ``registrationDate``, ``personCount``) is accepted and ignored.
    """

    id: int
    company_name: Optional[str] = None

    model_config = CAMEL_CONFIG


class PersonUpdate(PersonBase):
    """Schema for replacing the stored state of a person.

    There is no partial update: ``full_name``, ``phone_number`` and
    ``address`` overwrite the stored values as sent, including ``None``.
    The company is taken from ``company_id``, or from ``company.id``
    when only the nested company is present.
    """

    id: int
    company_id: Optional[int] = None
    company: Optional[CompanyRef] = None

    def resolved_company_id(self) -> Optional[int]:
        if self.company_id is not None:
            return self.company_id
        if self.company is not None:
            return self.company.id
        return None
