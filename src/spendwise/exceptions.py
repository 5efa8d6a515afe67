"""Custom exceptions for spendwise."""


class SpendwiseError(Exception):
    """Base exception for all spendwise errors."""

    pass


class ConfigurationError(SpendwiseError):
    """Raised when configuration is invalid or missing."""

    pass


class SnapshotError(SpendwiseError):
    """Raised when a backend snapshot cannot be read or validated."""

    pass


class GroupNotFoundError(SpendwiseError):
    """Raised when a group id is not present in the snapshot."""

    def __init__(self, group_id: str, message: str | None = None):
        self.group_id = group_id
        super().__init__(message or f"Group {group_id} not found in snapshot")
