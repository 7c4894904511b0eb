"""Chooses between direct and split transcription based on file size."""

import logging

from .aggregator import TranscriptionAggregator
from .audio_splitter import AudioSplitter
from .models import AudioAsset
from .transcriber import Transcriber
from .utils import MIB, format_size_mb

logger = logging.getLogger(__name__)

# Upload limit of the transcription service.
DEFAULT_SIZE_THRESHOLD_BYTES = 25 * MIB

class TranscriptionDispatcher:
    """Sends small files straight to the transcriber and splits large ones."""

    def __init__(
        self,
        transcriber: Transcriber,
        splitter: AudioSplitter,
        aggregator: TranscriptionAggregator,
        size_threshold_bytes: int = DEFAULT_SIZE_THRESHOLD_BYTES,
    ):
        self.transcriber = transcriber
        self.splitter = splitter
        self.aggregator = aggregator
        self.size_threshold_bytes = size_threshold_bytes

    def transcribe(self, asset: AudioAsset) -> str:
        """
        Returns the transcript of ``asset``.

        Files up to and including the threshold are transcribed in one
        request; a failure there propagates. Larger files are split and
        aggregated, where per-segment failures become inline markers.

        Raises:
            TranscriptionError: If the single-request path fails.
            AudioSplitError: If the split path cannot produce any segment.
        """
        if asset.size_bytes <= self.size_threshold_bytes:
            logger.info(f"File size: {format_size_mb(asset.size_bytes)}")
            return self.transcriber.transcribe(asset)

        logger.info(
            f"File size {format_size_mb(asset.size_bytes)} exceeds "
            f"{format_size_mb(self.size_threshold_bytes)}; splitting before transcription..."
        )
        with self.splitter.split(asset) as segments:
            return self.aggregator.aggregate(segments)
