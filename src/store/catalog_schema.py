"""Normalized catalog schema.

This module declares the four final tables and their foreign keys.
Tables are created when missing and never altered.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
)

from core.constants import ALBUM_ENTITY, ARTIST_ENTITY, GENRE_ENTITY, TRACK_ENTITY

CATALOG_METADATA = MetaData()

genres_table = Table(
    GENRE_ENTITY,
    CATALOG_METADATA,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", String, nullable=False, unique=True),
    CheckConstraint("name <> ''", name="genre_name_not_empty"),
)

artists_table = Table(
    ARTIST_ENTITY,
    CATALOG_METADATA,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("name", String, nullable=False),
    Column("birth_date", String, nullable=True),
    Column("genre_id", ForeignKey("genres.id"), nullable=True),
    CheckConstraint("name <> ''", name="artist_name_not_empty"),
)

albums_table = Table(
    ALBUM_ENTITY,
    CATALOG_METADATA,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("title", String, nullable=False),
    Column("release_date", String, nullable=True),
    Column("artist_id", ForeignKey("artists.id"), nullable=False),
    CheckConstraint("title <> ''", name="album_title_not_empty"),
)

tracks_table = Table(
    TRACK_ENTITY,
    CATALOG_METADATA,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("title", String, nullable=False),
    Column("duration_seconds", Integer, nullable=True),
    Column("album_id", ForeignKey("albums.id"), nullable=False),
    CheckConstraint("title <> ''", name="track_title_not_empty"),
    CheckConstraint(
        "duration_seconds IS NULL OR duration_seconds >= 0",
        name="track_duration_not_negative",
    ),
)

# Child-to-parent order for clearing.
CLEAR_ORDER = (tracks_table, albums_table, artists_table, genres_table)
