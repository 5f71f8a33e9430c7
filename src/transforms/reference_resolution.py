"""Natural-key reference resolution transform.

This module maps genre names, artist names, and album titles on child
rows to surrogate ids of parent entities the loader already committed.
Required references that do not resolve reject the row; the optional
artist genre reference resolves to no reference instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Mapping, TypeVar

from core.types import (
    Album,
    AlbumRow,
    Artist,
    ArtistRow,
    Genre,
    ResolvedAlbum,
    ResolvedArtist,
    ResolvedTrack,
    TrackRow,
)
from transforms.validation import clean_text

ResolvedT = TypeVar("ResolvedT")


class ReferenceIndex:
    """Lookup table from natural key to surrogate id for one entity type."""

    def __init__(self, ids_by_key: Mapping[str, int]) -> None:
        self._ids_by_key = dict(ids_by_key)

    @classmethod
    def for_genres(cls, genres: Iterable[Genre]) -> "ReferenceIndex":
        """Index committed genres by name."""
        return cls({genre.name: genre.id for genre in genres})

    @classmethod
    def for_artists(cls, artists: Iterable[Artist]) -> "ReferenceIndex":
        """Index committed artists by name."""
        return cls({artist.name: artist.id for artist in artists})

    @classmethod
    def for_albums(cls, albums: Iterable[Album]) -> "ReferenceIndex":
        """Index committed albums by title."""
        return cls({album.title: album.id for album in albums})

    def resolve(self, reference: str | None) -> int | None:
        """Return the id for a trimmed exact-match reference, if any."""
        key = clean_text(reference)
        if key is None:
            return None
        return self._ids_by_key.get(key)

    def __len__(self) -> int:
        return len(self._ids_by_key)


@dataclass(frozen=True)
class ResolutionResult(Generic[ResolvedT]):
    """Resolved rows and diagnostics for one entity type.

    Attributes:
        rows: Rows carrying surrogate foreign keys, in input order.
        dangling_count: Rows rejected for an unresolved required reference.
        unlinked_count: Rows kept after an unresolved optional reference.
    """

    rows: list[ResolvedT]
    dangling_count: int = 0
    unlinked_count: int = 0


def resolve_artist_genres(
    rows: Iterable[ArtistRow],
    genre_index: ReferenceIndex,
) -> ResolutionResult[ResolvedArtist]:
    """Resolve each artist's optional genre name to a genre id.

    Args:
        rows: Deduplicated artist rows.
        genre_index: Index over committed genres.

    Returns:
        Every artist, with ``genre_id`` None when absent or dangling.
    """
    resolved: list[ResolvedArtist] = []
    unlinked_count = 0
    for row in rows:
        genre_id = genre_index.resolve(row.genre_name)
        if genre_id is None and row.genre_name is not None:
            unlinked_count += 1
        resolved.append(
            ResolvedArtist(name=row.name, birth_date=row.birth_date, genre_id=genre_id)
        )
    return ResolutionResult(rows=resolved, unlinked_count=unlinked_count)


def resolve_album_artists(
    rows: Iterable[AlbumRow],
    artist_index: ReferenceIndex,
) -> ResolutionResult[ResolvedAlbum]:
    """Resolve each album's required artist name to an artist id.

    Args:
        rows: Deduplicated album rows.
        artist_index: Index over committed artists.

    Returns:
        Albums whose artist exists; the rest are counted as dangling.
    """
    resolved: list[ResolvedAlbum] = []
    dangling_count = 0
    for row in rows:
        artist_id = artist_index.resolve(row.artist_name)
        if artist_id is None:
            dangling_count += 1
            continue
        resolved.append(
            ResolvedAlbum(title=row.title, release_date=row.release_date, artist_id=artist_id)
        )
    return ResolutionResult(rows=resolved, dangling_count=dangling_count)


def resolve_track_albums(
    rows: Iterable[TrackRow],
    album_index: ReferenceIndex,
) -> ResolutionResult[ResolvedTrack]:
    """Resolve each track's required album title to an album id.

    Args:
        rows: Validated track rows.
        album_index: Index over committed albums.

    Returns:
        Tracks whose album exists; the rest are counted as dangling.
    """
    resolved: list[ResolvedTrack] = []
    dangling_count = 0
    for row in rows:
        album_id = album_index.resolve(row.album_title)
        if album_id is None:
            dangling_count += 1
            continue
        resolved.append(
            ResolvedTrack(
                title=row.title,
                duration_seconds=row.duration_seconds,
                album_id=album_id,
            )
        )
    return ResolutionResult(rows=resolved, dangling_count=dangling_count)
