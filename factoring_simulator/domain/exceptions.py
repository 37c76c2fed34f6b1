"""Domain-specific exceptions"""


class FactoringException(Exception):
    """Base exception for the factoring simulator"""

    pass


class ValidationError(FactoringException):
    """Input is malformed or outside accepted bounds (caller-correctable)"""

    pass


class DomainError(FactoringException):
    """Business rule violated - message is meant for the end user"""

    pass


class CurrencyMismatchError(FactoringException):
    """Money arithmetic attempted across different currencies"""

    pass


class SimulationError(FactoringException):
    """Unexpected failure while running a simulation"""

    pass
