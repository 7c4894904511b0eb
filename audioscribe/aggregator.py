"""Transcribes segments one by one and joins the results in order."""

import logging
from typing import List, Sequence

from .exceptions import TranscriptionError
from .models import AudioAsset, SegmentResult
from .transcriber import Transcriber

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"

class TranscriptionAggregator:
    """
    Runs a Transcriber over an ordered list of segments.

    A segment whose transcription fails is recorded as an inline error marker
    and the remaining segments are still transcribed, so the result always
    has one block per input asset.

    Labels use the plan index carried by each asset, so a segment that was
    never extracted leaves a visible gap (``1/3``, ``3/3``) instead of the
    later segments being renumbered.
    """

    def __init__(self, transcriber: Transcriber):
        self.transcriber = transcriber

    def aggregate(self, assets: Sequence[AudioAsset]) -> str:
        results: List[SegmentResult] = []
        total = len(assets)
        for position, asset in enumerate(assets):
            index = asset.segment_index if asset.segment_index is not None else position
            segment_count = asset.segment_count if asset.segment_count is not None else total
            logger.info(f"Transcribing segment {index + 1}/{segment_count}: {asset.name}")
            try:
                text = self.transcriber.transcribe(asset)
            except TranscriptionError as e:
                logger.error(f"Error while transcribing segment {index + 1}: {e}")
                results.append(SegmentResult.failed(index, segment_count, str(e)))
                continue
            results.append(SegmentResult.ok(index, segment_count, text))

        failed = sum(1 for result in results if not result.succeeded)
        if failed:
            logger.warning(f"{failed} of {len(results)} segments failed to transcribe.")
        return BLOCK_SEPARATOR.join(result.render() for result in results)
