"""Custom exception hierarchy for microlend."""


class MicrolendError(Exception):
    """Base exception for all microlend errors."""


class InvalidLoanTermsError(MicrolendError):
    """Raised when loan terms cannot produce a repayment schedule."""


class NoScheduleAvailableError(MicrolendError):
    """Raised when reconciling a loan that has no installments (open-ended)."""


class InvalidDateRangeError(MicrolendError):
    """Raised when a date window starts after it ends."""


class EntityNotFoundError(MicrolendError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(MicrolendError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(MicrolendError):
    """Raised when configuration is invalid or missing."""


class SinkError(MicrolendError):
    """Raised when a sink operation fails."""
