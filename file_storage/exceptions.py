"""File storage exceptions"""


class StorageError(Exception):
    """Base exception for file storage errors."""


class InvalidKeyError(StorageError):
    """Key cannot be mapped to a path inside the storage root."""

    def __init__(self, key: object, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid storage key {key!r}: {reason}")


class InvalidContentError(StorageError):
    """Content is not a readable binary stream."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid content: {reason}")


class StorageQuotaExceededError(StorageError):
    """Raised when storage quota is exceeded"""

    def __init__(self, current_bytes: int, incoming_bytes: int, max_size_gb: int):
        self.current_bytes = current_bytes
        self.incoming_bytes = incoming_bytes
        self.max_size_gb = max_size_gb
        super().__init__(
            f"Quota exceeded: {current_bytes / (1024**3):.2f}GB + "
            f"{incoming_bytes / (1024**3):.2f}GB > {max_size_gb}GB"
        )
