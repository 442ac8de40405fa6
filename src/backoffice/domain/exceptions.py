"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and map each kind to its
own outcome (bad request, not found, forbidden, conflict).
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The principal has no rights over the target entity."""


class InvalidStateError(DomainException):
    """A status-guarded transition was rejected."""


class AuthenticationError(DomainException):
    """The request carries no usable credentials."""


class StoreError(DomainException):
    """The backing store failed unexpectedly."""
