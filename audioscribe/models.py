"""Data models for AudioScribe."""

import os
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .utils import content_type_for

@dataclass(frozen=True)
class AudioAsset:
    """An audio file on disk, either the caller's source or a generated segment."""
    path: str
    size_bytes: int
    segment_index: Optional[int] = None # 0-based plan index, segments only
    segment_count: Optional[int] = None # Plan's total segment count, segments only

    @property
    def content_type(self) -> str:
        return content_type_for(self.path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @classmethod
    def from_path(
        cls,
        path: str,
        segment_index: Optional[int] = None,
        segment_count: Optional[int] = None,
    ) -> "AudioAsset":
        """
        Builds an asset from an existing file.

        Raises:
            FileNotFoundError: If the path does not exist or is not a regular file.
        """
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Audio file not found: {path}")
        return cls(
            path=path,
            size_bytes=os.path.getsize(path),
            segment_index=segment_index,
            segment_count=segment_count,
        )

@dataclass(frozen=True)
class SplitPlan:
    """How an oversized asset is cut into fixed-length time windows."""
    total_duration_seconds: float
    segment_duration_seconds: int
    segment_count: int

    def segment_bounds(self) -> Iterator[Tuple[int, int]]:
        """Yields (index, start_seconds) for every planned segment."""
        for index in range(self.segment_count):
            yield index, index * self.segment_duration_seconds

@dataclass(frozen=True)
class SegmentResult:
    """Outcome of transcribing one segment."""
    index: int
    segment_count: int
    text: str
    succeeded: bool

    @classmethod
    def ok(cls, index: int, segment_count: int, text: str) -> "SegmentResult":
        return cls(index=index, segment_count=segment_count, text=text, succeeded=True)

    @classmethod
    def failed(cls, index: int, segment_count: int, message: str) -> "SegmentResult":
        return cls(index=index, segment_count=segment_count, text=message, succeeded=False)

    @property
    def label(self) -> str:
        return f"=== segment {self.index + 1}/{self.segment_count} ==="

    def render(self) -> str:
        body = self.text if self.succeeded else f"[processing error: {self.text}]"
        return f"{self.label}\n{body}"
