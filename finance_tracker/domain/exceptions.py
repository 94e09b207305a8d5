"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Client input is malformed or out of range; message is safe to show"""

    pass


class DataIntegrityError(DomainException):
    """Stored record violates an invariant (e.g. unknown transaction kind)"""

    def __init__(self, message: str, transaction_id: str | None = None, kind: str | None = None):
        super().__init__(message)
        self.transaction_id = transaction_id
        self.kind = kind


class StorageFailure(DomainException):
    """Storage read failed or timed out"""

    pass
