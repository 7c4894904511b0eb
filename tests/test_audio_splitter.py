from __future__ import annotations

import os
from pathlib import Path

import pytest

from audioscribe.audio_splitter import WORKSPACE_PREFIX, AudioSplitter
from audioscribe.exceptions import AudioSplitError, SegmentExtractionError
from audioscribe.models import AudioAsset
from audioscribe.utils import MIB


class _FakeProbe:
    def __init__(self, duration: float) -> None:
        self.duration = duration

    def probe_duration(self, asset: AudioAsset) -> float:
        return self.duration


class _FakeExtractor:
    def __init__(self, fail_indices: set[int] | None = None) -> None:
        self.fail_indices = fail_indices or set()
        self.calls: list[tuple[int, float, float, str]] = []

    def extract(self, source, start_seconds, duration_seconds, output_path,
                segment_index=None, segment_count=None) -> AudioAsset:
        self.calls.append((segment_index, start_seconds, duration_seconds, output_path))
        if segment_index in self.fail_indices:
            raise SegmentExtractionError(f"segment {segment_index} broke")
        Path(output_path).write_bytes(b"wav")
        return AudioAsset.from_path(output_path, segment_index=segment_index, segment_count=segment_count)


def _source(size_bytes: int) -> AudioAsset:
    return AudioAsset(path="/data/long.mp3", size_bytes=size_bytes)


def _workspaces(root: Path) -> list[Path]:
    return [p for p in root.iterdir() if p.name.startswith(WORKSPACE_PREFIX)]


def test_split_yields_segments_in_plan_order(tmp_path: Path) -> None:
    extractor = _FakeExtractor()
    splitter = AudioSplitter(_FakeProbe(1000.0), extractor, temp_root=str(tmp_path))

    with splitter.split(_source(100 * MIB)) as segments:
        assert [s.segment_index for s in segments] == [0, 1, 2, 3, 4]
        assert all(s.segment_count == 5 for s in segments)
        assert [os.path.basename(s.path) for s in segments] == [
            "segment_000.wav", "segment_001.wav", "segment_002.wav", "segment_003.wav", "segment_004.wav",
        ]
        assert all(os.path.isfile(s.path) for s in segments)
        workspace = Path(segments[0].path).parent

    assert [(c[0], c[1], c[2]) for c in extractor.calls] == [
        (0, 0, 200), (1, 200, 200), (2, 400, 200), (3, 600, 200), (4, 800, 200),
    ]
    assert not workspace.exists()
    assert _workspaces(tmp_path) == []


def test_failed_extraction_is_omitted_and_plan_indices_kept(tmp_path: Path) -> None:
    # 1800s at 60 MiB plans three 600s segments
    splitter = AudioSplitter(_FakeProbe(1800.0), _FakeExtractor(fail_indices={1}), temp_root=str(tmp_path))

    with splitter.split(_source(60 * MIB)) as segments:
        assert len(segments) == 2
        assert [s.segment_index for s in segments] == [0, 2]
        assert [s.segment_count for s in segments] == [3, 3]

    assert _workspaces(tmp_path) == []


def test_each_split_gets_its_own_workspace(tmp_path: Path) -> None:
    splitter = AudioSplitter(_FakeProbe(100.0), _FakeExtractor(), temp_root=str(tmp_path))

    with splitter.split(_source(30 * MIB)) as first:
        with splitter.split(_source(30 * MIB)) as second:
            assert Path(first[0].path).parent != Path(second[0].path).parent


def test_unknown_duration_aborts_and_cleans_up(tmp_path: Path) -> None:
    extractor = _FakeExtractor()
    splitter = AudioSplitter(_FakeProbe(0.0), extractor, temp_root=str(tmp_path))

    with pytest.raises(AudioSplitError, match="duration"):
        with splitter.split(_source(30 * MIB)):
            pass

    assert extractor.calls == []
    assert _workspaces(tmp_path) == []


def test_no_usable_segments_aborts_and_cleans_up(tmp_path: Path) -> None:
    splitter = AudioSplitter(_FakeProbe(300.0), _FakeExtractor(fail_indices={0, 1, 2, 3, 4}),
                             temp_root=str(tmp_path))

    with pytest.raises(AudioSplitError, match="no usable segments"):
        with splitter.split(_source(500 * MIB)):
            pass

    assert _workspaces(tmp_path) == []


def test_error_raised_inside_the_block_still_cleans_up(tmp_path: Path) -> None:
    splitter = AudioSplitter(_FakeProbe(1000.0), _FakeExtractor(), temp_root=str(tmp_path))

    with pytest.raises(RuntimeError):
        with splitter.split(_source(100 * MIB)) as segments:
            assert segments
            raise RuntimeError("caller failed")

    assert _workspaces(tmp_path) == []


def test_cleanup_errors_are_not_raised(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    splitter = AudioSplitter(_FakeProbe(60.0), _FakeExtractor(), temp_root=str(tmp_path))

    def broken_rmtree(path, *args, **kwargs) -> None:
        raise PermissionError("locked")

    monkeypatch.setattr("audioscribe.audio_splitter.shutil.rmtree", broken_rmtree)

    with splitter.split(_source(30 * MIB)) as segments:
        assert len(segments) == 1
