"""Reads the total duration of an audio file with ffprobe."""

import json
import logging
import math
import subprocess
from typing import Optional

import ffmpeg

from .models import AudioAsset

logger = logging.getLogger(__name__)

class MediaDurationProbe:
    """Queries ffprobe for container duration."""

    def __init__(self, ffprobe_path: Optional[str] = None, timeout_seconds: Optional[float] = None):
        """
        Initializes the MediaDurationProbe.

        Args:
            ffprobe_path: Optional path to the ffprobe executable.
                          If None, assumes ffprobe is in the system PATH.
            timeout_seconds: Optional limit on how long ffprobe may run.
        """
        self.ffprobe_cmd = ffprobe_path or 'ffprobe'
        self.timeout_seconds = timeout_seconds

    def _probe(self, path: str) -> dict:
        if self.timeout_seconds is None:
            return ffmpeg.probe(path, cmd=self.ffprobe_cmd)

        # ffmpeg.probe cannot bound its run time, so issue the same query directly
        args = [self.ffprobe_cmd, '-show_format', '-show_streams', '-of', 'json', path]
        process = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        try:
            out, err = process.communicate(timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            raise
        if process.returncode != 0:
            raise ffmpeg.Error('ffprobe', out, err)
        return json.loads(out.decode('utf-8'))

    def probe_duration(self, asset: AudioAsset) -> float:
        """
        Returns the duration of the asset in seconds.

        Never raises: any failure is logged and reported as 0.0, which callers
        must read as "unknown" rather than as an empty file.
        """
        try:
            info = self._probe(asset.path)
        except ffmpeg.Error as e:
            stderr_output = e.stderr.decode('utf-8', errors='replace') if e.stderr else "No stderr output"
            logger.warning(f"ffprobe failed for {asset.path}: {stderr_output}")
            return 0.0
        except subprocess.TimeoutExpired:
            logger.warning(f"ffprobe timed out after {self.timeout_seconds}s for {asset.path}")
            return 0.0
        except (OSError, ValueError) as e:
            # OSError: executable missing. ValueError: output was not JSON.
            logger.warning(f"Could not run ffprobe for {asset.path}: {e}")
            return 0.0

        raw_duration = (info.get('format') or {}).get('duration')
        try:
            duration = float(str(raw_duration).strip())
        except (TypeError, ValueError):
            logger.warning(f"ffprobe returned no usable duration for {asset.path}: {raw_duration!r}")
            return 0.0

        if not math.isfinite(duration) or duration < 0:
            logger.warning(f"ffprobe returned an invalid duration for {asset.path}: {duration}")
            return 0.0
        logger.debug(f"Duration of {asset.path}: {duration:.3f}s")
        return duration
