from __future__ import annotations

import logging

import pandas as pd

from .archive import summarize_volumes, top_level_volume_names
from .errors import ArchiveReadError
from .paths import resolve_path
from .plan import DEFAULT_IMAGE, DEFAULT_RUNTIME, plan_backup, plan_restore
from .run import execute

log = logging.getLogger(__name__)


def backup(
    volume_names: list[str],
    target: str,
    *,
    image: str = DEFAULT_IMAGE,
    runtime: str = DEFAULT_RUNTIME,
) -> None:
    # The empty target file stays behind if anything below fails.
    resolved = resolve_path(target, create=True)
    log.debug("Resolved target %s -> %s", target, resolved)

    print(f"💾 Backing up volumes: {', '.join(volume_names)}", flush=True)
    execute(plan_backup(volume_names, resolved, image=image, runtime=runtime))
    print(f"Finished backup to {resolved.path()}", flush=True)


def restore(
    source: str,
    *,
    image: str = DEFAULT_IMAGE,
    runtime: str = DEFAULT_RUNTIME,
) -> None:
    resolved = resolve_path(source)
    log.debug("Resolved source %s -> %s", source, resolved)

    volume_names = top_level_volume_names(resolved.path())
    if not volume_names:
        raise ArchiveReadError(f"No volumes found in archive {resolved.path()}")

    print(f"Restoring volumes: {', '.join(volume_names)}", flush=True)
    execute(plan_restore(volume_names, resolved, image=image, runtime=runtime))
    print("Restore complete.", flush=True)


def inspect(source: str, *, csv: bool = False) -> "pd.DataFrame":
    summary = summarize_volumes(source)
    if csv:
        print(summary.to_csv(sep=";", index=False), end="", flush=True)
    elif summary.empty:
        print(f"No volumes found in archive {source}", flush=True)
    else:
        print(summary.to_string(index=False), flush=True)
    return summary
