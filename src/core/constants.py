"""Core constants used across Reissue modules.

This module centralizes entity names, source layouts, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_SOURCE_DIR = Path("data/raw")
DEFAULT_DATABASE_URL = "sqlite:///.reissue/catalog.db"

GENRE_ENTITY = "genres"
ARTIST_ENTITY = "artists"
ALBUM_ENTITY = "albums"
TRACK_ENTITY = "tracks"
# Parent-to-child load order; clearing runs in reverse.
ENTITY_LOAD_ORDER = (GENRE_ENTITY, ARTIST_ENTITY, ALBUM_ENTITY, TRACK_ENTITY)

SOURCE_FILE_NAMES = {
    GENRE_ENTITY: "genres.csv",
    ARTIST_ENTITY: "artists.csv",
    ALBUM_ENTITY: "albums.csv",
    TRACK_ENTITY: "tracks.csv",
}
SOURCE_COLUMNS = {
    GENRE_ENTITY: ("Name",),
    ARTIST_ENTITY: ("Name", "BirthDate", "GenreName"),
    ALBUM_ENTITY: ("Title", "ReleaseDate", "ArtistName"),
    TRACK_ENTITY: ("Title", "Duration", "AlbumTitle"),
}
REQUIRED_FIELDS = {
    GENRE_ENTITY: ("Name",),
    ARTIST_ENTITY: ("Name",),
    ALBUM_ENTITY: ("Title", "ArtistName"),
    TRACK_ENTITY: ("Title", "AlbumTitle"),
}
SOURCE_ENCODING = "utf-8"

DURATION_UNIT_MINUTES = "minutes"
DURATION_UNIT_SECONDS = "seconds"
SUPPORTED_DURATION_UNITS = (DURATION_UNIT_MINUTES, DURATION_UNIT_SECONDS)
DEFAULT_DURATION_UNIT = DURATION_UNIT_MINUTES
SECONDS_PER_MINUTE = 60
# Largest value a signed 64-bit INTEGER column can hold.
MAX_STORED_INTEGER = 2**63 - 1

RUN_FILE_VERSION = 1
STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"
