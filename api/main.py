#!/usr/bin/env python3
import json
import logging
import os
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config.settings import DEFAULT_HOST, DEFAULT_PORT, LIST_ENDPOINT, STATIC_PREFIX
from engine.paths import LOG_DIR, ensure_dir, resolve_library_dir
from library.errors import DirectoryNotFound, FileNotFound
from library.service import get_cover_for_file, list_songs

APP_NAME = "LocalMusic API"

# Resolved once; descriptors and the static mount both point here.
LIBRARY_ROOT = resolve_library_dir(os.environ.get("LOCALMUSIC_DIR"))


def _env_or_default(name, default):
    value = os.environ.get(name)
    return value if value else default


def _setup_logging(log_dir):
    ensure_dir(log_dir)
    root = logging.getLogger("")
    log_path = os.path.join(log_dir, "localmusic.log")
    root.setLevel(logging.INFO)
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if os.path.abspath(getattr(handler, "baseFilename", "")) == os.path.abspath(log_path):
                return
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    file_handler.setLevel(logging.INFO)
    root.addHandler(file_handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging(LOG_DIR)
    app.state.library_dir = LIBRARY_ROOT
    logging.info("Local music directory: %s", app.state.library_dir)
    yield


class Utf8JSONResponse(JSONResponse):
    def render(self, content):
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


app = FastAPI(
    title=APP_NAME,
    description="Scans the local music directory and serves normalized song descriptors.",
    default_response_class=Utf8JSONResponse,
    lifespan=lifespan,
)


def _library_dir():
    return getattr(app.state, "library_dir", None) or LIBRARY_ROOT


@app.get("/api")
async def api_index():
    return {
        "name": APP_NAME,
        "description": "LocalMusic API service",
        "list": [
            {
                "name": "LocalMusicAPI",
                "url": LIST_ENDPOINT,
            },
        ],
    }


@app.get(LIST_ENDPOINT)
async def get_local_music_list():
    """List every readable song in the library directory.

    Files that fail extraction are left out; only a missing directory or a
    scan-level error fails the whole request.
    """
    library_dir = _library_dir()
    try:
        songs = await list_songs(library_dir)
    except DirectoryNotFound:
        logging.error("Music directory does not exist: %s", library_dir)
        return JSONResponse(status_code=500, content={"error": "Music directory not found"})
    except Exception as exc:
        logging.exception("Error scanning local music")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to scan local music", "details": str(exc)},
        )
    return [song.to_json() for song in songs]


@app.get(LIST_ENDPOINT + "/{filename}")
async def get_local_music_cover(filename: str):
    library_dir = _library_dir()
    try:
        return await anyio.to_thread.run_sync(get_cover_for_file, library_dir, filename)
    except FileNotFound:
        logging.error("File not found: %s", os.path.join(library_dir, filename))
        return JSONResponse(status_code=404, content={"error": "File not found"})
    except Exception:
        logging.exception("Error reading file metadata for %s", filename)
        return JSONResponse(status_code=500, content={"error": "Failed to read file metadata"})


if os.path.isdir(LIBRARY_ROOT):
    app.mount(
        STATIC_PREFIX.rstrip("/"),
        StaticFiles(directory=LIBRARY_ROOT),
        name="localmusic",
    )


if __name__ == "__main__":
    import uvicorn

    host = _env_or_default("LOCALMUSIC_HOST", DEFAULT_HOST)
    port = int(_env_or_default("LOCALMUSIC_PORT", str(DEFAULT_PORT)))
    uvicorn.run("api.main:app", host=host, port=port, reload=False)
