class DocumentNotFoundError(Exception):
    """Raised when a contract cannot be found in the database."""
