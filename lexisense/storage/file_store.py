import hashlib
import re
import uuid
from pathlib import Path

from lexisense.storage.exceptions import InvalidStorageKeyError, StorageError

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9._-]")
_MAX_NAME_LENGTH = 100


def generate_storage_key(organization_id: str, original_name: str, data: bytes) -> str:
    """Build a unique key: {organization_id}/{uuid}-{sha256[:8]}-{safe_name}"""
    safe_org = _UNSAFE_CHARS_RE.sub("_", organization_id)
    safe_name = _UNSAFE_CHARS_RE.sub("_", original_name)[:_MAX_NAME_LENGTH]
    digest = hashlib.sha256(data).hexdigest()
    return f"{safe_org}/{uuid.uuid4()}-{digest[:8]}-{safe_name}"


class LocalFileStore:
    """Stores uploaded contract bytes under a files root on local disk."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def save(self, organization_id: str, original_name: str, data: bytes) -> str:
        """Write *data* to disk and return its storage key.

        Raises:
            StorageError: if the file cannot be written.
        """
        key = generate_storage_key(organization_id, original_name, data)
        path = self._resolve_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to store {key}: {exc}") from exc
        return key

    def load(self, storage_key: str) -> bytes:
        """Read stored bytes.

        Raises:
            FileNotFoundError: if nothing is stored under this key.
            InvalidStorageKeyError: if the key points outside the files root.
        """
        path = self._resolve_path(storage_key)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()

    def exists(self, storage_key: str) -> bool:
        return self._resolve_path(storage_key).is_file()

    def _resolve_path(self, storage_key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / storage_key).resolve()
        if not path.is_relative_to(root) or path == root:
            raise InvalidStorageKeyError(f"Invalid storage key: {storage_key!r}")
        return path
