class GospelLibraryError(Exception):
    """Base exception for the gospel library service."""


class ConfigurationError(GospelLibraryError):
    """Raised when configuration is missing or invalid."""


class StoreNotInitializedError(GospelLibraryError):
    """Raised when the library database cannot be opened."""
