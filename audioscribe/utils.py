"""Utility functions for AudioScribe."""

import os
import logging
from typing import Tuple
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

MIB = 1024 * 1024

CONTENT_TYPES = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".webm": "audio/webm",
}
DEFAULT_CONTENT_TYPE = "audio/wav"

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def content_type_for(file_path: str) -> str:
    """Maps a file extension to the media type sent to the transcription service."""
    ext = os.path.splitext(file_path)[1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)

def output_paths_for(audio_path: str) -> Tuple[str, str]:
    """
    Derives where results for an audio file are written.

    The transcript replaces the audio extension with ``.txt``; the analysis
    goes to ``<stem>_ai.txt`` in the same directory.

    Returns:
        (transcript_path, analysis_path)
    """
    base, _ = os.path.splitext(audio_path)
    directory = os.path.dirname(audio_path)
    stem = os.path.basename(base)
    return f"{base}.txt", os.path.join(directory, f"{stem}_ai.txt")

def format_size_mb(size_bytes: int) -> str:
    return f"{size_bytes / MIB:.1f}MB"
