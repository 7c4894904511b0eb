"""Custom Exceptions for the AudioScribe application."""

class AudioScribeError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(AudioScribeError):
    """Exception raised for missing or invalid configuration values."""
    pass

class AudioSplitError(AudioScribeError):
    """Exception raised when a split operation cannot produce usable segments."""
    pass

class SegmentExtractionError(AudioScribeError):
    """Exception raised when ffmpeg fails to materialize one segment."""
    pass

class TranscriptionError(AudioScribeError):
    """Exception raised for errors returned by the transcription service."""
    pass

class FileSystemError(AudioScribeError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
