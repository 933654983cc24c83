"""HTTP client for the local music endpoints, as used by the player UI."""

from __future__ import annotations

import urllib.parse
from typing import Any

import requests

from config.settings import LIST_ENDPOINT


class LocalMusicClient:
    """Fetch song descriptors and covers from a running LocalMusic API."""

    def __init__(self, base_url: str = "http://127.0.0.1:25884", *, timeout_sec: int = 60) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec

    def _request_json(self, path: str) -> Any:
        response = requests.get(f"{self.base_url}{path}", timeout=self.timeout_sec)
        if response.status_code != 200:
            raise RuntimeError(
                f"LocalMusic request failed ({response.status_code}): {_error_message(response)}"
            )
        return response.json()

    def get_local_music_list(self) -> list[dict[str, Any]]:
        """Return the song descriptors exactly as the list endpoint serves them."""
        payload = self._request_json(LIST_ENDPOINT)
        if not isinstance(payload, list):
            raise RuntimeError("LocalMusic list response is not a JSON array")
        return payload

    def get_cover(self, filename: str) -> str:
        filename = (filename or "").strip()
        if not filename:
            raise ValueError("filename is required")
        encoded = urllib.parse.quote(filename, safe="")
        payload = self._request_json(f"{LIST_ENDPOINT}/{encoded}")
        return payload["cover"]


def _error_message(response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or "no body"
    if isinstance(payload, dict) and payload.get("error"):
        details = payload.get("details")
        return f"{payload['error']} ({details})" if details else str(payload["error"])
    return str(payload)
