from __future__ import annotations

import os

import pytest

from audioscribe.models import AudioAsset
from audioscribe.utils import content_type_for, output_paths_for


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.wav", "audio/wav"),
        ("a.MP3", "audio/mpeg"),
        ("a.m4a", "audio/mp4"),
        ("a.flac", "audio/flac"),
        ("a.ogg", "audio/ogg"),
        ("a.webm", "audio/webm"),
        ("a.aac", "audio/wav"),
        ("noext", "audio/wav"),
    ],
)
def test_content_type_for(name: str, expected: str) -> None:
    assert content_type_for(name) == expected


def test_output_paths_sit_next_to_the_audio() -> None:
    transcript, analysis = output_paths_for(os.path.join("rec", "meeting.mp3"))

    assert transcript == os.path.join("rec", "meeting.txt")
    assert analysis == os.path.join("rec", "meeting_ai.txt")


def test_audio_asset_from_path(make_audio) -> None:
    asset = make_audio("talk.flac", b"12345")

    assert asset.size_bytes == 5
    assert asset.content_type == "audio/flac"
    assert asset.segment_index is None


def test_audio_asset_from_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        AudioAsset.from_path(str(tmp_path / "nope.wav"))
