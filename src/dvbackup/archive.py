from __future__ import annotations

import itertools
import logging
import tarfile
import zlib
from typing import Iterable, Iterator, Optional

import pandas as pd

from .errors import ArchiveReadError

log = logging.getLogger(__name__)

ArchiveEntryPath = tuple[str, ...]

# Volume directories sit directly below the archive root ("./<volume>/...").
# Counted from the end of the ancestor chain, that is the third ancestor.
VOLUME_ANCESTOR_FROM_END = 3

SUMMARY_COLUMNS = ["volume", "entries", "files", "bytes"]


def entry_segments(name: str) -> ArchiveEntryPath:
    segments: list[str] = []
    if name.startswith("/"):
        segments.append("/")
    elif name == "." or name.startswith("./"):
        segments.append(".")
    segments.extend(s for s in name.split("/") if s not in ("", "."))
    return tuple(segments)


def _ancestors(segments: ArchiveEntryPath) -> list[ArchiveEntryPath]:
    """Leaf first. Relative paths end with the empty path, absolute ones with '/'."""
    chain = [segments[:i] for i in range(len(segments), 0, -1)]
    if segments and segments[0] != "/":
        chain.append(())
    return chain


def _from_end(items: list, n: int):
    if n <= 0 or n > len(items):
        return None
    return items[len(items) - n]


def volume_name_of(segments: ArchiveEntryPath) -> Optional[str]:
    ancestor = _from_end(_ancestors(segments), VOLUME_ANCESTOR_FROM_END)
    if not ancestor:
        return None
    name = ancestor[-1]
    if name in ("/", ".", ".."):
        return None
    return name


def unique_adjacent(names: Iterable[str]) -> list[str]:
    return [name for name, _ in itertools.groupby(names)]


def _check_end_of_archive(tar: tarfile.TarFile, archive_path: str) -> None:
    """
    tarfile stops iterating at the first unreadable header after the first
    one. Anything but NUL padding from there on is a malformed entry.
    """
    tar.fileobj.seek(tar.offset)
    while True:
        block = tar.fileobj.read(tarfile.RECORDSIZE)
        if not block:
            return
        if block.strip(b"\0"):
            raise ArchiveReadError(
                f"Failed to read archive {archive_path}, "
                f"malformed entry at offset {tar.offset}"
            )


def _iter_members(archive_path: str) -> Iterator[tarfile.TarInfo]:
    try:
        with tarfile.open(
            archive_path, mode="r:gz", encoding="utf-8", errors="strict"
        ) as tar:
            yield from tar
            _check_end_of_archive(tar, archive_path)
    except (OSError, EOFError, zlib.error, tarfile.TarError, UnicodeDecodeError) as e:
        raise ArchiveReadError(f"Failed to read archive {archive_path}, {e}") from e


def _read_members(archive_path: str) -> list[tarfile.TarInfo]:
    # Materialize first so a decode error late in the stream discards everything.
    members = list(_iter_members(archive_path))
    log.debug("Read %d entries from %s", len(members), archive_path)
    return members


def list_entries(archive_path: str) -> list[ArchiveEntryPath]:
    return [entry_segments(m.name) for m in _read_members(archive_path)]


def top_level_volume_names(archive_path: str) -> list[str]:
    """
    Return the volume names stored in a backup archive.

    Every entry contributes the name of its top-level directory; entries that
    are too shallow contribute nothing. Repeats are collapsed only when they
    are adjacent, which relies on tar writing each volume contiguously.
    """
    names = (volume_name_of(segments) for segments in list_entries(archive_path))
    return unique_adjacent(n for n in names if n is not None)


def summarize_volumes(archive_path: str) -> "pd.DataFrame":
    """
    Per-volume entry counts and regular file sizes, in first-seen order.
    """
    rows = []
    for member in _read_members(archive_path):
        volume = volume_name_of(entry_segments(member.name))
        if volume is None:
            continue
        rows.append(
            {
                "volume": volume,
                "file": int(member.isfile()),
                "size": member.size if member.isfile() else 0,
            }
        )

    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df = pd.DataFrame(rows)
    summary = df.groupby("volume", sort=False).agg(
        entries=("file", "size"),
        files=("file", "sum"),
        bytes=("size", "sum"),
    )
    return summary.reset_index()[SUMMARY_COLUMNS]
