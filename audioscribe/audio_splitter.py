"""Splits an oversized audio file into transcribable segments."""

import logging
import os
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional

from .duration_probe import MediaDurationProbe
from .exceptions import AudioSplitError, SegmentExtractionError
from .models import AudioAsset
from .segment_extractor import SegmentExtractor
from .segment_planner import (
    DEFAULT_MAX_SEGMENT_SECONDS,
    DEFAULT_MIN_SEGMENT_SECONDS,
    DEFAULT_TARGET_SEGMENT_BYTES,
    plan_segments,
)

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "audio_split_"

class AudioSplitter:
    """
    Plans, extracts and cleans up the segments of one source file.

    Segment files live in a private workspace directory that exists only for
    the duration of the ``split`` context.
    """

    def __init__(
        self,
        probe: MediaDurationProbe,
        extractor: SegmentExtractor,
        temp_root: Optional[str] = None,
        target_segment_bytes: int = DEFAULT_TARGET_SEGMENT_BYTES,
        min_segment_seconds: int = DEFAULT_MIN_SEGMENT_SECONDS,
        max_segment_seconds: int = DEFAULT_MAX_SEGMENT_SECONDS,
    ):
        self.probe = probe
        self.extractor = extractor
        self.temp_root = temp_root
        self.target_segment_bytes = target_segment_bytes
        self.min_segment_seconds = min_segment_seconds
        self.max_segment_seconds = max_segment_seconds

    def _create_workspace(self) -> str:
        root = self.temp_root or tempfile.gettempdir()
        workspace = os.path.join(root, f"{WORKSPACE_PREFIX}{uuid.uuid4().hex}")
        os.makedirs(workspace)
        logger.debug(f"Created split workspace: {workspace}")
        return workspace

    def _remove_workspace(self, workspace: str) -> None:
        try:
            if os.path.isdir(workspace):
                shutil.rmtree(workspace)
                logger.debug(f"Removed split workspace: {workspace}")
        except OSError as e:
            logger.warning(f"Could not remove temporary directory {workspace}: {e}")

    @contextmanager
    def split(self, source: AudioAsset) -> Iterator[List[AudioAsset]]:
        """
        Yields the successfully extracted segments of ``source`` in plan order.

        A segment that ffmpeg fails to produce is logged and left out; the
        remaining assets keep their original plan index. The workspace is
        deleted when the context exits, whether normally or by exception.

        Raises:
            AudioSplitError: If the duration is unknown, the plan cannot be
                             computed, or no segment could be extracted.
        """
        workspace = self._create_workspace()
        try:
            yield self._extract_all(source, workspace)
        finally:
            self._remove_workspace(workspace)

    def _extract_all(self, source: AudioAsset, workspace: str) -> List[AudioAsset]:
        duration = self.probe.probe_duration(source)
        if duration <= 0:
            raise AudioSplitError(f"Could not determine the duration of {source.path}.")

        plan = plan_segments(
            duration,
            source.size_bytes,
            target_segment_bytes=self.target_segment_bytes,
            min_segment_seconds=self.min_segment_seconds,
            max_segment_seconds=self.max_segment_seconds,
        )

        segments: List[AudioAsset] = []
        for index, start_seconds in plan.segment_bounds():
            output_path = os.path.join(workspace, f"segment_{index:03d}.wav")
            try:
                segment = self.extractor.extract(
                    source,
                    start_seconds,
                    plan.segment_duration_seconds,
                    output_path,
                    segment_index=index,
                    segment_count=plan.segment_count,
                )
            except SegmentExtractionError as e:
                logger.warning(f"Failed to create segment {index + 1}/{plan.segment_count}: {e}")
                continue
            segments.append(segment)
            logger.info(f"Created segment {index + 1}/{plan.segment_count}: {segment.name}")

        if not segments:
            raise AudioSplitError(f"Splitting {source.path} produced no usable segments.")
        logger.info(f"Split into {len(segments)} of {plan.segment_count} planned segments.")
        return segments
