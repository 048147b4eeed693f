"""Storage backend factory"""

from config.settings import Settings, get_settings
from file_storage.backends.base import StorageBackend
from file_storage.backends.local import LocalStorageBackend
from logger import get_logger

logger = get_logger(__name__)


def create_storage_backend(settings: Settings | None = None) -> StorageBackend:
    """
    Create storage backend based on settings.

    Args:
        settings: Settings to use (defaults to the global settings)

    Returns:
        StorageBackend instance configured based on STORAGE_TYPE setting
    """
    settings = settings or get_settings()
    storage_type = settings.storage.type.upper()

    logger.info(f"Creating storage backend: type={storage_type}")

    if storage_type == "LOCAL":
        base_path = settings.storage.resolved_base_path
        max_size_gb = settings.storage.max_size_gb

        backend = LocalStorageBackend(
            base_path=base_path,
            max_size_gb=max_size_gb,
            chunk_size=settings.storage.chunk_size,
        )

        logger.info(f"LOCAL storage backend created: path={base_path} | max_size={max_size_gb}GB")
        return backend

    if storage_type == "S3":
        raise NotImplementedError(
            "S3 storage backend is not implemented. "
            "Please use STORAGE_TYPE=LOCAL or implement an S3 StorageBackend."
        )

    raise ValueError(f"Unknown storage type: {storage_type}. Supported types: LOCAL, S3")


# Singleton instance
_backend_instance: StorageBackend | None = None


def get_storage_backend() -> StorageBackend:
    """Get the global storage backend instance (singleton)"""
    global _backend_instance
    if _backend_instance is None:
        _backend_instance = create_storage_backend()
    return _backend_instance


def reset_storage_backend() -> None:
    """Drop the global storage backend instance (useful for testing)"""
    global _backend_instance
    _backend_instance = None
