"""Storage key validation and key-to-path mapping"""

import re
from pathlib import Path, PurePosixPath, PureWindowsPath

from file_storage.exceptions import InvalidKeyError

_SEPARATORS = re.compile(r"[\\/]+")


def validate_key(key: object) -> str:
    """
    Check that a key is a usable relative path.

    Args:
        key: Caller-supplied key

    Returns:
        The key unchanged

    Raises:
        InvalidKeyError: If key is empty, absolute or climbs out with '..'
    """
    if not isinstance(key, str):
        raise InvalidKeyError(key, "key must be a string")
    if not key.strip():
        raise InvalidKeyError(key, "key is empty")
    if "\x00" in key:
        raise InvalidKeyError(key, "key contains a NUL byte")

    windows_path = PureWindowsPath(key)
    if PurePosixPath(key).is_absolute() or windows_path.drive or windows_path.root:
        raise InvalidKeyError(key, "key must be relative")

    if ".." in _SEPARATORS.split(key):
        raise InvalidKeyError(key, "parent directory references are not allowed")

    return key


class StorageKeyResolver:
    """Map keys to physical paths sandboxed under a base directory"""

    def __init__(self, base_path: Path | str):
        """
        Initialize resolver.

        Args:
            base_path: Storage root; made absolute but not required to exist
        """
        self.base = Path(base_path).absolute()

    def resolve(self, key: object) -> Path:
        """
        Get physical path for a key.

        Symlinks are followed when checking containment, so a link that
        points outside the base directory is rejected as well. This reads
        the filesystem and blocks; async callers run it in a worker thread.

        Returns:
            Path like: <base>/reports/2024/q3.pdf

        Raises:
            InvalidKeyError: If key is invalid or escapes the base directory
        """
        key = validate_key(key)
        path = self.base / key

        try:
            base_real = self.base.resolve()
            real = path.resolve()
        except (OSError, RuntimeError) as exc:
            # Symlink loops
            raise InvalidKeyError(key, f"cannot resolve path: {exc}") from exc

        if real == base_real:
            raise InvalidKeyError(key, "key does not name a file")
        if not real.is_relative_to(base_real):
            raise InvalidKeyError(key, "key resolves outside the storage root")

        return path
