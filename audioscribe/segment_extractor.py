"""Cuts a time window out of an audio file using ffmpeg."""

import ffmpeg
import os
import logging
import subprocess
from typing import Optional

from .exceptions import SegmentExtractionError
from .models import AudioAsset

logger = logging.getLogger(__name__)

SEGMENT_SAMPLE_RATE = 16000
SEGMENT_CHANNELS = 1
SEGMENT_CODEC = 'pcm_s16le'

class SegmentExtractor:
    """Materializes one segment of a source file as a 16 kHz mono PCM WAV."""

    def __init__(self, ffmpeg_path: Optional[str] = None, timeout_seconds: Optional[float] = None):
        """
        Initializes the SegmentExtractor.

        Args:
            ffmpeg_path: Optional path to the ffmpeg executable.
                         If None, assumes ffmpeg is in the system PATH.
            timeout_seconds: Optional limit on a single ffmpeg run. The process
                             is killed when it is exceeded.
        """
        self.ffmpeg_cmd = ffmpeg_path or 'ffmpeg'
        self.timeout_seconds = timeout_seconds
        logger.info(f"Using ffmpeg command: {self.ffmpeg_cmd}")

    def build_stream(self, source_path: str, start_seconds: float, duration_seconds: float, output_path: str):
        """Returns the ffmpeg-python stream for one segment (seek is applied after decoding starts)."""
        return (
            ffmpeg
            .input(source_path)
            .output(
                output_path,
                ss=start_seconds,
                t=duration_seconds,
                acodec=SEGMENT_CODEC,
                ar=SEGMENT_SAMPLE_RATE,
                ac=SEGMENT_CHANNELS,
            )
            .overwrite_output()
        )

    def _run(self, stream) -> None:
        if self.timeout_seconds is None:
            stream.run(cmd=self.ffmpeg_cmd, capture_stdout=True, capture_stderr=True)
            return

        process = stream.run_async(cmd=self.ffmpeg_cmd, pipe_stdout=True, pipe_stderr=True)
        try:
            out, err = process.communicate(timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            raise
        if process.returncode != 0:
            raise ffmpeg.Error('ffmpeg', out, err)

    def extract(
        self,
        source: AudioAsset,
        start_seconds: float,
        duration_seconds: float,
        output_path: str,
        segment_index: Optional[int] = None,
        segment_count: Optional[int] = None,
    ) -> AudioAsset:
        """
        Writes ``duration_seconds`` of audio starting at ``start_seconds`` to ``output_path``.

        Args:
            source: The asset to cut from.
            start_seconds: Offset of the window in the source.
            duration_seconds: Length of the window.
            output_path: Where the WAV segment is written.
            segment_index: Plan index recorded on the returned asset.
            segment_count: Plan size recorded on the returned asset.

        Returns:
            The AudioAsset for the written segment.

        Raises:
            SegmentExtractionError: If ffmpeg fails, times out, or writes nothing.
        """
        logger.debug(f"Extracting {start_seconds}s+{duration_seconds}s of {source.path} to {output_path}")
        stream = self.build_stream(source.path, start_seconds, duration_seconds, output_path)
        try:
            self._run(stream)
        except ffmpeg.Error as e:
            stderr_output = e.stderr.decode('utf-8', errors='replace') if e.stderr else "No stderr output"
            logger.debug(f"ffmpeg stderr: {stderr_output}")
            self._remove_partial(output_path)
            raise SegmentExtractionError(f"ffmpeg failed: {stderr_output.strip()}") from e
        except subprocess.TimeoutExpired as e:
            self._remove_partial(output_path)
            raise SegmentExtractionError(f"ffmpeg timed out after {self.timeout_seconds}s") from e
        except OSError as e:
            logger.error(f"Could not run ffmpeg ({self.ffmpeg_cmd}). Is ffmpeg installed?")
            self._remove_partial(output_path)
            raise SegmentExtractionError(f"Could not run ffmpeg: {e}") from e

        if not os.path.isfile(output_path):
            raise SegmentExtractionError(f"ffmpeg reported success but produced no file: {output_path}")
        return AudioAsset.from_path(output_path, segment_index=segment_index, segment_count=segment_count)

    @staticmethod
    def _remove_partial(output_path: str) -> None:
        if os.path.exists(output_path):
            try:
                os.remove(output_path)
            except OSError:
                logger.warning(f"Could not clean up partially created segment: {output_path}")
