from __future__ import annotations

import logging
import os
import pathlib
from dataclasses import dataclass

from .errors import PathResolutionError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPath:
    parent_dir: str
    filename: str

    def path(self) -> str:
        return os.path.join(self.parent_dir, self.filename)


def _require_text(value: str, what: str, canonical: str) -> str:
    # Paths with undecodable bytes come back surrogate-escaped; they cannot be
    # passed to the runtime as --volume arguments verbatim.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise PathResolutionError(
            f"Failed to convert {what} of path to string: {canonical!r}"
        ) from None
    return value


def resolve_path(path: str, *, create: bool = False) -> ResolvedPath:
    """
    Resolve a user supplied path into its absolute parent directory and filename.

    With create=True an empty file is created first when nothing exists at
    the path. An existing file is never truncated.
    """
    if create and not os.path.exists(path):
        log.debug("Creating empty placeholder file: %s", path)
        try:
            pathlib.Path(path).touch()
        except (OSError, ValueError) as e:
            raise PathResolutionError(f"Failed to create file {path}, {e}") from e

    try:
        canonical = os.path.realpath(path, strict=True)
    except (OSError, ValueError) as e:
        raise PathResolutionError(f"Failed to resolve path {path}, {e}") from e

    parent, filename = os.path.split(canonical)
    if not filename:
        raise PathResolutionError(f"Failed to get parent path of path: {canonical!r}")

    return ResolvedPath(
        parent_dir=_require_text(parent, "parent path", canonical),
        filename=_require_text(filename, "filename", canonical),
    )
