from __future__ import annotations

from pathlib import Path

import pytest

from audioscribe.models import AudioAsset


@pytest.fixture
def make_audio(tmp_path: Path):
    def _make(name: str = "meeting.wav", payload: bytes = b"RIFF0000WAVE") -> AudioAsset:
        path = tmp_path / name
        path.write_bytes(payload)
        return AudioAsset.from_path(str(path))

    return _make
