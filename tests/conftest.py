import sys
import wave
from pathlib import Path

import pytest


# Ensure tests can import project packages regardless of how pytest is invoked.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from metadata.types import FormatInfo, SecondaryMetadata  # noqa: E402


def write_silent_wav(
    path: Path,
    duration_seconds: float = 0.1,
    sample_rate: int = 44_100,
    sample_width: int = 2,
) -> Path:
    nframes = int(duration_seconds * sample_rate)
    with wave.open(str(path), "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(sample_width)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(b"\x00" * sample_width * nframes)
    return path


def tag_wav(path: Path, *, title=None, artist=None, album=None, picture=None) -> Path:
    """Write ID3 frames into a WAV file with mutagen."""
    from mutagen.id3 import APIC, TALB, TIT2, TPE1
    from mutagen.wave import WAVE

    audio = WAVE(str(path))
    audio.add_tags()
    if title:
        audio.tags.add(TIT2(encoding=3, text=[title]))
    if artist:
        audio.tags.add(TPE1(encoding=3, text=[artist]))
    if album:
        audio.tags.add(TALB(encoding=3, text=[album]))
    if picture:
        data, mime = picture
        audio.tags.add(APIC(encoding=3, mime=mime, type=3, desc="cover", data=data))
    audio.save()
    return path


def fake_secondary(**format_overrides) -> SecondaryMetadata:
    fmt = {
        "duration_seconds": 0.1,
        "bitrate": 705_600,
        "codec": "PCM_S16LE",
    }
    fmt.update(format_overrides)
    return SecondaryMetadata(format=FormatInfo(**fmt))


@pytest.fixture
def fake_ffprobe(monkeypatch):
    """Replace the ffprobe-backed reader; files whose name contains 'broken' fail to probe."""
    calls = []

    def _read(file_path, *, load_pictures=True):
        calls.append(file_path)
        if "broken" in Path(file_path).name:
            raise RuntimeError(f"ffprobe failed for {file_path}: Invalid data found")
        return fake_secondary()

    monkeypatch.setattr("library.service.read_secondary_metadata", _read)
    monkeypatch.setattr("library.service.ffprobe_available", lambda: True)
    return calls


@pytest.fixture
def make_wav():
    return write_silent_wav


@pytest.fixture
def make_tagged_wav():
    def _make(path: Path, *, sample_rate: int = 44_100, sample_width: int = 2, **tags) -> Path:
        write_silent_wav(path, sample_rate=sample_rate, sample_width=sample_width)
        return tag_wav(path, **tags)

    return _make
