from __future__ import annotations

from contextlib import contextmanager

import pytest

from audioscribe.aggregator import TranscriptionAggregator
from audioscribe.dispatcher import DEFAULT_SIZE_THRESHOLD_BYTES, TranscriptionDispatcher
from audioscribe.exceptions import TranscriptionError
from audioscribe.models import AudioAsset
from audioscribe.transcriber import Transcriber


class _RecordingTranscriber(Transcriber):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.seen: list[AudioAsset] = []

    def transcribe(self, asset: AudioAsset) -> str:
        self.seen.append(asset)
        if self.error is not None:
            raise self.error
        return f"text of {asset.path}"


class _FakeSplitter:
    def __init__(self) -> None:
        self.split_sources: list[AudioAsset] = []
        self.exited = False

    @contextmanager
    def split(self, source: AudioAsset):
        self.split_sources.append(source)
        try:
            yield [
                AudioAsset(path="seg0.wav", size_bytes=1, segment_index=0, segment_count=2),
                AudioAsset(path="seg1.wav", size_bytes=1, segment_index=1, segment_count=2),
            ]
        finally:
            self.exited = True


def _dispatcher(transcriber: Transcriber, splitter: _FakeSplitter) -> TranscriptionDispatcher:
    return TranscriptionDispatcher(transcriber, splitter, TranscriptionAggregator(transcriber))


def test_default_threshold_is_25_mib() -> None:
    assert DEFAULT_SIZE_THRESHOLD_BYTES == 25 * 1024 * 1024


def test_file_at_threshold_is_sent_whole() -> None:
    transcriber = _RecordingTranscriber()
    splitter = _FakeSplitter()
    asset = AudioAsset(path="meeting.mp3", size_bytes=DEFAULT_SIZE_THRESHOLD_BYTES)

    text = _dispatcher(transcriber, splitter).transcribe(asset)

    assert text == "text of meeting.mp3"
    assert transcriber.seen == [asset]
    assert splitter.split_sources == []


def test_file_one_byte_over_threshold_is_split() -> None:
    transcriber = _RecordingTranscriber()
    splitter = _FakeSplitter()
    asset = AudioAsset(path="meeting.mp3", size_bytes=DEFAULT_SIZE_THRESHOLD_BYTES + 1)

    text = _dispatcher(transcriber, splitter).transcribe(asset)

    assert splitter.split_sources == [asset]
    assert splitter.exited is True
    assert [a.path for a in transcriber.seen] == ["seg0.wav", "seg1.wav"]
    assert text == "=== segment 1/2 ===\ntext of seg0.wav\n\n=== segment 2/2 ===\ntext of seg1.wav"


def test_whole_file_failure_propagates() -> None:
    transcriber = _RecordingTranscriber(error=TranscriptionError("401 - unauthorized"))
    dispatcher = _dispatcher(transcriber, _FakeSplitter())

    with pytest.raises(TranscriptionError, match="401"):
        dispatcher.transcribe(AudioAsset(path="small.wav", size_bytes=100))


def test_custom_threshold() -> None:
    transcriber = _RecordingTranscriber()
    splitter = _FakeSplitter()
    dispatcher = TranscriptionDispatcher(transcriber, splitter, TranscriptionAggregator(transcriber),
                                         size_threshold_bytes=10)

    dispatcher.transcribe(AudioAsset(path="big.wav", size_bytes=11))

    assert len(splitter.split_sources) == 1
