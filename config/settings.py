"""Application settings constants."""

from __future__ import annotations

# Extensions eligible for the library listing, compared lower-cased.
AUDIO_EXTENSIONS = frozenset({".mp3", ".flac", ".wav", ".m4a"})

# URL prefix under which the static file server exposes the library directory.
STATIC_PREFIX = "/localmusic/"

# Cover shown by the player UI when a file carries no usable artwork.
PLACEHOLDER_COVER = "/images/song.jpg?assest"

DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_ALBUM = "Local Music"
DEFAULT_CODEC = "Unknown"
DEFAULT_PICTURE_MIME = "image/jpeg"

# Upper bound for a single ffprobe/ffmpeg invocation.
FFPROBE_TIMEOUT_SECONDS = 15

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 25884

# Route serving the song list; the single-file cover route hangs below it.
LIST_ENDPOINT = "/api/localmusic"
