class PagescribeError(Exception):
    """Base exception for all pagescribe errors."""


class ConfigurationError(PagescribeError):
    """Raised when startup configuration is missing or invalid."""


class SessionClosedError(PagescribeError):
    """Raised when the controlled browser page or context is no longer usable."""


class ListingError(PagescribeError):
    """Base exception for screenshot directory listing failures."""


class ImageDirectoryNotFoundError(ListingError):
    """Raised when the screenshot directory does not exist."""


class NoPagesFoundError(ListingError):
    """Raised when the screenshot directory holds no page images."""


class TranscriptionError(PagescribeError):
    """Raised by providers when the inference service gives no usable answer."""
