"""Custom exceptions for archive conversion."""


class DistillerError(Exception):
    """Base exception for all conversion errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ArchiveOpenError(DistillerError):
    """Raised when a source archive cannot be opened."""

    def __init__(self, message: str, path: str | None = None, *args, **kwargs):
        self.path = path
        super().__init__(message, *args, **kwargs)


class EntryError(DistillerError):
    """Base exception for failures tied to a single archive entry."""

    def __init__(self, message: str, entry_name: str | None = None, *args, **kwargs):
        self.entry_name = entry_name
        super().__init__(message, *args, **kwargs)


class UnsupportedFormatError(EntryError):
    """Raised when entry bytes match none of the supported image signatures."""

    pass


class MalformedImageError(EntryError):
    """Raised when a recognized image cannot be decoded."""

    pass


class EncodeError(EntryError):
    """Raised when a rendered page cannot be encoded."""

    pass


class PackagingError(DistillerError):
    """Raised when the EPUB container cannot be written."""

    pass


class DirectoryCreateError(DistillerError):
    """Raised when the extraction directory cannot be created."""

    pass


class WriteError(DistillerError):
    """Raised when an extracted page cannot be written."""

    pass
