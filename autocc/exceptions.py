"""Custom Exceptions for the AutoCC application."""

class AutoCCError(Exception):
    """Base class for exceptions in this package."""
    pass

class ConfigurationError(AutoCCError):
    """Exception raised for errors in configuration loading."""
    pass

class FileSystemError(AutoCCError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass

class NotFoundError(AutoCCError):
    """Exception raised when a video, its metadata or a caption track does not exist."""
    pass

class MalformedDocumentError(AutoCCError):
    """Exception raised when subtitle text cannot be parsed into segments."""
    pass

class IntegrityError(AutoCCError):
    """Base class for structural mismatches between a batch and its translation."""
    pass

class BatchSizeMismatchError(IntegrityError):
    """Exception raised when a translated field batch does not match the packed length."""
    pass

class LengthMismatchError(IntegrityError):
    """Exception raised when translated texts do not line up with document segments."""
    pass

class TranslationSizeMismatchError(IntegrityError):
    """Exception raised when a backend returns a different number of strings than it was sent."""
    pass

class BackendError(AutoCCError):
    """Exception raised for failures of an external translation or catalog call."""
    pass

class UploadFailedError(AutoCCError):
    """Exception raised when a finished artifact could not be persisted."""
    pass

class JobCancelledError(AutoCCError):
    """Exception raised when a translation job is cancelled by its caller."""
    pass
