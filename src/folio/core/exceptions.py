"""
Folio exception hierarchy.

All folio exceptions inherit from FolioError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class FolioError(Exception):
    """Base exception class for all folio errors."""


class ConfigurationError(FolioError):
    """Raised for configuration errors (missing keys, invalid values)."""


class DocumentParseError(FolioError):
    """Raised when a single source file cannot be turned into a document."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path or '<text>'}: {reason}")


class RenderError(DocumentParseError):
    """Raised when the markdown body of a document fails to render."""


class FileIOError(FolioError):
    """Raised for file I/O errors."""


class ContentDirectoryError(FileIOError):
    """Raised when the content directory is missing or cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Content directory {path} unavailable: {reason}")
