from __future__ import annotations

import asyncio
import os
from pathlib import Path

import pytest

import library.service as service
from library.errors import DirectoryNotFound, ExtractionFailure, FileNotFound, SecondaryParserUnavailable
from library.service import get_cover_for_file, list_songs, process_file, scan_library

PLACEHOLDER = "/images/song.jpg?assest"


def test_process_file_builds_descriptor(tmp_path: Path, make_tagged_wav, fake_ffprobe) -> None:
    make_tagged_wav(
        tmp_path / "song.wav",
        title="Tagged Title",
        artist="Tagged Artist",
        album="Tagged Album",
        picture=(b"img", "image/png"),
    )

    result = process_file(str(tmp_path), "song.wav", 7)

    assert result.ok
    song = result.song.to_json()
    assert song["id"] == 7
    assert song["name"] == "Tagged Title"
    assert song["artists"] == "Tagged Artist"
    assert song["album"] == "Tagged Album"
    assert song["alias"] == ""
    assert song["cover"] == "data:image/png;base64,aW1n"
    assert song["durationMs"] == 100
    assert song["sizeMB"] == round(os.path.getsize(tmp_path / "song.wav") / (1024 * 1024), 2)
    assert song["path"] == "/localmusic/song.wav"
    assert song["quality"] == "HQ"
    assert song["type"] == "song"
    assert song["bitrateKbps"] == 705
    assert song["sampleRate"] == 44_100
    assert song["bitsPerSample"] == 16
    assert song["codec"] == "PCM_S16LE"


def test_process_file_untagged_uses_fallbacks(tmp_path: Path, make_wav, fake_ffprobe) -> None:
    make_wav(tmp_path / "Plain Song.wav", sample_rate=22_050)

    song = process_file(str(tmp_path), "Plain Song.wav", 1).song

    assert song.name == "Plain Song"
    assert song.artists == "Unknown Artist"
    assert song.album == "Local Music"
    assert song.cover == PLACEHOLDER
    assert song.quality == "SQ"


def test_process_file_returns_failure_instead_of_raising(tmp_path: Path, make_wav, fake_ffprobe) -> None:
    make_wav(tmp_path / "broken.wav")

    result = process_file(str(tmp_path), "broken.wav", 2)

    assert not result.ok
    assert isinstance(result.error, ExtractionFailure)
    assert result.error.filename == "broken.wav"
    assert result.position == 2


def test_list_songs_drops_corrupt_file_and_succeeds(tmp_path: Path, make_wav, fake_ffprobe) -> None:
    for name in ["one.wav", "two.wav", "three.wav"]:
        make_wav(tmp_path / name)
    (tmp_path / "broken.mp3").write_bytes(b"definitely not an mpeg stream" * 4)
    (tmp_path / "cover.jpg").write_bytes(b"jpg")

    songs = asyncio.run(list_songs(str(tmp_path)))

    assert sorted(song.path for song in songs) == [
        "/localmusic/one.wav",
        "/localmusic/three.wav",
        "/localmusic/two.wav",
    ]


def test_ids_keep_listing_positions_when_mid_list_file_fails(
    tmp_path: Path, make_wav, fake_ffprobe, monkeypatch
) -> None:
    names = ["first.wav", "broken.wav", "third.wav", "fourth.wav"]
    for name in names:
        make_wav(tmp_path / name)
    monkeypatch.setattr(service, "list_audio_files", lambda _library_dir: list(names))

    songs = asyncio.run(list_songs(str(tmp_path)))

    assert [song.id for song in songs] == [1, 3, 4]
    assert [song.path for song in songs] == ["/localmusic/first.wav", "/localmusic/third.wav", "/localmusic/fourth.wav"]


def test_scan_library_waits_for_every_file(tmp_path: Path, make_wav, fake_ffprobe) -> None:
    for index in range(6):
        make_wav(tmp_path / f"track{index}.wav")
    make_wav(tmp_path / "broken.wav")

    results = asyncio.run(scan_library(str(tmp_path)))

    assert len(results) == 7
    assert len(fake_ffprobe) == 7
    assert sum(1 for result in results if result.ok) == 6
    assert [result.position for result in results] == list(range(1, 8))


def test_repeated_scans_are_identical_by_path(tmp_path: Path, make_tagged_wav, fake_ffprobe) -> None:
    make_tagged_wav(tmp_path / "a.wav", title="A", picture=(b"img", "image/jpeg"))
    make_tagged_wav(tmp_path / "b.wav", sample_rate=96_000, artist="B")

    first = {song.path: song for song in asyncio.run(list_songs(str(tmp_path)))}
    second = {song.path: song for song in asyncio.run(list_songs(str(tmp_path)))}

    assert first == second


def test_list_songs_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFound):
        asyncio.run(list_songs(str(tmp_path / "missing")))


def test_get_cover_for_file_uses_primary_picture(tmp_path: Path, make_tagged_wav) -> None:
    make_tagged_wav(tmp_path / "song.wav", picture=(b"img", ""))

    assert get_cover_for_file(str(tmp_path), "song.wav") == {"cover": "data:image/jpeg;base64,aW1n"}


def test_get_cover_for_file_never_consults_secondary_parser(tmp_path: Path, make_wav, monkeypatch) -> None:
    make_wav(tmp_path / "song.wav")

    def _fail(*_args, **_kwargs):
        raise AssertionError("secondary parser must not run")

    monkeypatch.setattr(service, "read_secondary_metadata", _fail)

    assert get_cover_for_file(str(tmp_path), "song.wav") == {"cover": PLACEHOLDER}


@pytest.mark.parametrize("filename", ["missing.mp3", "../outside.mp3"])
def test_get_cover_for_file_not_found(tmp_path: Path, filename: str) -> None:
    library_dir = tmp_path / "library"
    library_dir.mkdir()
    (tmp_path / "outside.mp3").write_bytes(b"x")

    with pytest.raises(FileNotFound):
        get_cover_for_file(str(library_dir), filename)


def test_process_file_failure_reports_bare_filename_for_unreadable_container(
    tmp_path: Path, fake_ffprobe
) -> None:
    (tmp_path / "garbage.mp3").write_bytes(b"definitely not an mpeg stream" * 4)

    result = process_file(str(tmp_path), "garbage.mp3", 1)

    assert not result.ok
    assert result.error.filename == "garbage.mp3"


def test_list_songs_missing_ffprobe_fails_the_scan(tmp_path: Path, make_tagged_wav, monkeypatch) -> None:
    make_tagged_wav(tmp_path / "a.wav", title="A")
    make_tagged_wav(tmp_path / "b.wav", title="B")
    monkeypatch.setattr(service, "ffprobe_available", lambda: False)

    with pytest.raises(SecondaryParserUnavailable, match="ffprobe"):
        asyncio.run(list_songs(str(tmp_path)))


def test_list_songs_empty_library_does_not_need_ffprobe(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "notes.txt").write_text("not audio")
    monkeypatch.setattr(service, "ffprobe_available", lambda: False)

    assert asyncio.run(list_songs(str(tmp_path))) == []
