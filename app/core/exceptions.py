class InventoryError(Exception):
    """Base for failures that reach the caller as a structured result."""

    code = "INVENTORY_ERROR"
    status_code = 500

    def __init__(self, message: str, *, details=None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailedError(InventoryError):
    code = "VALIDATION_FAILED"
    status_code = 400


class DuplicateKeyError(InventoryError):
    code = "DUPLICATE_KEY"
    status_code = 409


class NotFoundError(InventoryError):
    code = "NOT_FOUND"
    status_code = 404


class InactiveChannelError(InventoryError):
    code = "CHANNEL_INACTIVE"
    status_code = 400


class SyncInProgressError(InventoryError):
    code = "SYNC_IN_PROGRESS"
    status_code = 409


__all__ = [
    "DuplicateKeyError",
    "InactiveChannelError",
    "InventoryError",
    "NotFoundError",
    "SyncInProgressError",
    "ValidationFailedError",
]
