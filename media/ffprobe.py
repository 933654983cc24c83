"""Wrapper utilities for retrieving media information using ffprobe."""

from __future__ import annotations

import json
import shutil
import subprocess

from config.settings import FFPROBE_TIMEOUT_SECONDS


def ffprobe_available() -> bool:
    """Return True when the ffprobe binary can be found on PATH."""
    return shutil.which("ffprobe") is not None


def probe_media(file_path: str, *, timeout: float = FFPROBE_TIMEOUT_SECONDS) -> dict:
    """Return the ``ffprobe`` JSON payload with format and stream sections.

    Raises:
        RuntimeError: If ``ffprobe`` execution fails, times out or the command is missing.
        ValueError: If the output is not a JSON object.
    """
    command = [
        "ffprobe",
        "-v",
        "error",
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        file_path,
    ]
    completed = _run(command, file_path, tool="ffprobe", timeout=timeout, text=True)

    try:
        payload = json.loads(completed.stdout or "{}")
    except json.JSONDecodeError as exc:
        raise ValueError(f"ffprobe returned invalid JSON for {file_path}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"ffprobe returned a non-object payload for {file_path}")
    return payload


def extract_attached_picture(
    file_path: str,
    stream_index: int,
    *,
    timeout: float = FFPROBE_TIMEOUT_SECONDS,
) -> bytes:
    """Return the raw bytes of an ``attached_pic`` stream, copied without re-encoding.

    Raises:
        RuntimeError: If ``ffmpeg`` execution fails, times out or the command is missing.
        ValueError: If the stream produced no data.
    """
    command = [
        "ffmpeg",
        "-v",
        "error",
        "-i",
        file_path,
        "-map",
        f"0:{int(stream_index)}",
        "-c",
        "copy",
        "-f",
        "image2pipe",
        "-",
    ]
    completed = _run(command, file_path, tool="ffmpeg", timeout=timeout, text=False)
    if not completed.stdout:
        raise ValueError(f"ffmpeg returned no picture data for {file_path}")
    return completed.stdout


def _run(command, file_path, *, tool, timeout, text):
    try:
        return subprocess.run(
            command,
            capture_output=True,
            text=text,
            check=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise RuntimeError(f"{tool} is not installed or not available in PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise RuntimeError(f"{tool} timed out while probing: {file_path}") from exc
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr or ""
        if isinstance(stderr, bytes):
            stderr = stderr.decode("utf-8", errors="replace")
        stderr_text = stderr.strip()
        raise RuntimeError(f"{tool} failed for {file_path}: {stderr_text or exc}") from exc
