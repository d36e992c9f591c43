class StorageError(Exception):
    """Raised when a document cannot be stored or read back."""


class InvalidStorageKeyError(StorageError):
    """Raised when a storage key would escape the files root."""
