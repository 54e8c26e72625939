from __future__ import annotations

import argparse

from .plan import DEFAULT_IMAGE, DEFAULT_RUNTIME


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="docker-volume-backup",
        description="Backup and restore docker volumes as a single tar.gz archive.",
    )
    p.add_argument(
        "--image",
        default=DEFAULT_IMAGE,
        help=f"Image used to run tar inside the ephemeral container (default: {DEFAULT_IMAGE})",
    )
    p.add_argument(
        "--runtime",
        default=DEFAULT_RUNTIME,
        help=f"Container runtime executable (default: {DEFAULT_RUNTIME})",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    p_backup = sub.add_parser("backup", help="Backup volumes into a tar.gz archive")
    p_backup.add_argument(
        "volume_names",
        metavar="volume_name",
        nargs="+",
        help="Docker volume(s) to back up",
    )
    p_backup.add_argument(
        "target",
        help="Archive file to write (created if missing)",
    )

    p_restore = sub.add_parser(
        "restore",
        help="Restore every volume contained in a tar.gz archive",
    )
    p_restore.add_argument("source", help="Archive file created by 'backup'")

    p_inspect = sub.add_parser(
        "inspect",
        help="List the volumes contained in a tar.gz archive",
    )
    p_inspect.add_argument("source", help="Archive file created by 'backup'")
    p_inspect.add_argument(
        "--csv",
        action="store_true",
        help="Print the summary as ';' separated CSV",
    )

    return p
