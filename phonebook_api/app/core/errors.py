"""
Error kinds raised by the service layer.

All of them derive from ``ValueError`` so callers that only care about
"the request could not be served" can keep catching ``ValueError``.
The endpoints translate each kind into an HTTP status code.
"""


class PhoneBookError(ValueError):
    """Base class for phone book errors."""


class ValidationError(PhoneBookError):
    """A field is missing, too long or otherwise malformed."""


class DuplicateNameError(PhoneBookError):
    """A company with the same name already exists."""


class CompanyNotFoundError(PhoneBookError):
    """The referenced company does not exist."""


class CompanyInUseError(PhoneBookError):
    """The company still has persons and cannot be deleted."""


class PersonNotFoundError(PhoneBookError):
    """The referenced person does not exist."""


class NoPersonsError(PhoneBookError):
    """A random pick was requested but there are no persons."""
