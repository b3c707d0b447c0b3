"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidDateError(DomainException):
    """Transaction date cannot be parsed or ordered"""

    pass


class NegativeAmountError(DomainException):
    """Transaction amount is below zero; direction belongs to the kind, not the sign"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass


class TransactionNotFoundError(DomainException):
    """No transaction with this id exists for the owner"""

    pass


class PartnerNotFoundError(DomainException):
    """No partner with this id exists for the owner"""

    pass


class DuplicatePartnerError(DomainException):
    """Owner already has a partner with this name"""

    pass
