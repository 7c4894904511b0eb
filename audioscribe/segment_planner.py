"""Works out how to cut an oversized audio file into segments."""

import logging
import math

from .exceptions import AudioSplitError
from .models import SplitPlan
from .utils import MIB

logger = logging.getLogger(__name__)

# Segments target 20 MiB so each one stays under the 25 MiB upload ceiling.
DEFAULT_TARGET_SEGMENT_BYTES = 20 * MIB
DEFAULT_MIN_SEGMENT_SECONDS = 60
DEFAULT_MAX_SEGMENT_SECONDS = 600

def plan_segments(
    total_duration_seconds: float,
    total_size_bytes: int,
    target_segment_bytes: int = DEFAULT_TARGET_SEGMENT_BYTES,
    min_segment_seconds: int = DEFAULT_MIN_SEGMENT_SECONDS,
    max_segment_seconds: int = DEFAULT_MAX_SEGMENT_SECONDS,
) -> SplitPlan:
    """
    Computes segment length and count from the source's duration and size.

    The segment length is the number of seconds that holds roughly
    ``target_segment_bytes`` at the file's average bitrate, clamped into
    ``[min_segment_seconds, max_segment_seconds]``.

    Args:
        total_duration_seconds: Duration reported by the probe. 0 means unknown.
        total_size_bytes: Size of the source file.
        target_segment_bytes: Desired amount of source audio per segment.
        min_segment_seconds: Lower bound on segment length.
        max_segment_seconds: Upper bound on segment length.

    Returns:
        The SplitPlan.

    Raises:
        AudioSplitError: If duration or size is not positive.
        ValueError: If the bounds are inconsistent.
    """
    if min_segment_seconds <= 0 or max_segment_seconds < min_segment_seconds:
        raise ValueError(
            f"Invalid segment bounds: min={min_segment_seconds}, max={max_segment_seconds}"
        )
    if target_segment_bytes <= 0:
        raise ValueError("target_segment_bytes must be > 0")
    if total_duration_seconds <= 0:
        raise AudioSplitError("Could not determine the audio duration; cannot plan segments.")
    if total_size_bytes <= 0:
        raise AudioSplitError(f"Invalid audio file size: {total_size_bytes} bytes.")

    segment_duration = round(total_duration_seconds * target_segment_bytes / total_size_bytes)
    segment_duration = max(segment_duration, min_segment_seconds)
    segment_duration = min(segment_duration, max_segment_seconds)
    segment_count = math.ceil(total_duration_seconds / segment_duration)

    logger.info(
        f"Audio duration: {total_duration_seconds:.1f}s, segment length: {segment_duration}s, "
        f"segments: {segment_count}"
    )
    return SplitPlan(
        total_duration_seconds=total_duration_seconds,
        segment_duration_seconds=segment_duration,
        segment_count=segment_count,
    )
